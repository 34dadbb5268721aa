"""Next Fit / First Fit packing heuristics and their Decreasing variants."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Callable

from .containers import Container, Item, packed_volume
from .errors import ConfigurationError, InvalidPackingError, UnsatisfiableItemError
from .schemas import Heuristic, SolverConfig

PackFunc = Callable[[Iterable[Item], int], list[Container]]


def _open_container(item: Item, capacity: int) -> Container:
    container = Container(capacity)
    if container.add(item) is not None:
        raise UnsatisfiableItemError(item, capacity)
    return container


def next_fit(items: Iterable[Item], capacity: int) -> list[Container]:
    """Next Fit (NF) keeps a single open container.

    When an item does not fit, the current container is closed for good and
    a new one is opened.
    """

    containers: list[Container] = []
    current: Container | None = None
    for item in items:
        if current is not None and current.add(item) is None:
            continue
        current = _open_container(item, capacity)
        containers.append(current)

    return containers


def first_fit(items: Iterable[Item], capacity: int) -> list[Container]:
    """First Fit (FF) keeps every container open in creation order.

    Each item goes into the first container that accepts it.
    """

    containers: list[Container] = []
    for item in items:
        for container in containers:
            if container.add(item) is None:
                break
        else:
            containers.append(_open_container(item, capacity))

    return containers


def decreasing(items: Iterable[Item]) -> list[Item]:
    # sorted() is stable, so equal sizes keep their input order
    return sorted(items, key=lambda item: item.size, reverse=True)


HEURISTICS: dict[Heuristic, PackFunc] = {
    Heuristic.NEXT_FIT: next_fit,
    Heuristic.FIRST_FIT: first_fit,
}


@dataclass(frozen=True)
class Solver:
    """A heuristic bound to a container capacity."""

    heuristic: Heuristic
    capacity: int
    sorted: bool = False

    @property
    def name(self) -> str:
        return f"{self.heuristic.value} Decreasing" if self.sorted else self.heuristic.value

    def solve(self, items: Sequence[Item]) -> list[Container]:
        pack = HEURISTICS[self.heuristic]
        if self.sorted:
            items = decreasing(items)
        return pack(items, self.capacity)


def create_solver(config: SolverConfig, capacity: int) -> Solver:
    try:
        heuristic = Heuristic(config.id)
    except ValueError as e:
        raise ConfigurationError(f"Unknown solver: {config.id!r}") from e
    if capacity <= 0:
        raise ConfigurationError(f"Container capacity must be positive, got {capacity}")
    return Solver(heuristic=heuristic, capacity=capacity, sorted=config.sorted)


def validate_packing(items: Sequence[Item], containers: Sequence[Container]) -> None:
    """Check the capacity invariant and that every item was packed exactly once.

    Raises:
        InvalidPackingError: If a container overflows or the packed sizes differ from
            the input sizes.
    """

    for index, container in enumerate(containers):
        if container.used > container.capacity:
            raise InvalidPackingError(
                f"Container {index} overflows: {container.used} > {container.capacity}"
            )
        if container.used != sum(item.size for item in container.items):
            raise InvalidPackingError(f"Container {index} fill level does not match its items")

    total = sum(item.size for item in items)
    if packed_volume(list(containers)) != total:
        raise InvalidPackingError(
            f"Packed volume differs from input volume {total}"
        )

    packed = sorted(item.size for container in containers for item in container.items)
    expected = sorted(item.size for item in items)
    if packed != expected:
        raise InvalidPackingError(
            f"Packed sizes differ from input: {len(packed)} packed, {len(expected)} given"
        )
