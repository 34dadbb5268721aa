"""Failure classification and analysis."""

from enum import Enum

from binpack_core.errors import InvalidPackingError, UnsatisfiableItemError


class FailureType(str, Enum):
    UNSATISFIABLE_ITEM = "unsatisfiable_item"
    INVALID_PACKING = "invalid_packing"
    OTHER = "other"


def classify_error(error: BaseException) -> FailureType:
    if isinstance(error, UnsatisfiableItemError):
        return FailureType.UNSATISFIABLE_ITEM
    elif isinstance(error, InvalidPackingError):
        return FailureType.INVALID_PACKING
    else:
        return FailureType.OTHER


class FailureAnalyzer:
    def __init__(self):
        self.failures: dict[FailureType, int] = {ft: 0 for ft in FailureType}

    def record_failure(self, error: BaseException) -> FailureType:
        failure_type = classify_error(error)
        self.failures[failure_type] += 1
        return failure_type

    @property
    def total(self) -> int:
        return sum(self.failures.values())

    def get_failure_stats(self) -> dict[str, int]:
        return {ft.value: count for ft, count in self.failures.items()}

    def get_top_failures(self, n: int = 5) -> list[tuple[str, int]]:
        sorted_failures = sorted(
            self.failures.items(),
            key=lambda x: x[1],
            reverse=True
        )
        return [(ft.value, count) for ft, count in sorted_failures[:n] if count > 0]
