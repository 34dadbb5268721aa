from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator


TBaseSchema = TypeVar("TBaseSchema", bound="BaseSchema")


class BaseSchema(BaseModel):
    def to_json(self) -> str:
        return self.model_dump_json()

    def to_dict(self) -> dict[str, object]:
        return self.model_dump(mode="json")

    @classmethod
    def from_json(cls: type[TBaseSchema], data: str) -> TBaseSchema:
        return cls.model_validate_json(data)

    @classmethod
    def from_dict(cls: type[TBaseSchema], data: Mapping[str, object]) -> TBaseSchema:
        return cls.model_validate(data)


class Heuristic(str, Enum):
    NEXT_FIT = "Next Fit"
    FIRST_FIT = "First Fit"


class ProblemSettings(BaseSchema):
    model_config = ConfigDict(frozen=True)

    item_size_min: int = Field(ge=0)
    item_size_max: int = Field(ge=0)
    item_limit: int = Field(ge=0)
    container_size: int = Field(gt=0)

    @model_validator(mode="after")
    def size_range_not_empty(self) -> "ProblemSettings":
        if self.item_size_min >= self.item_size_max:
            raise ValueError(
                f"item_size_min ({self.item_size_min}) must be less than "
                f"item_size_max ({self.item_size_max})"
            )
        return self

    def label(self) -> str:
        return (
            f"[{self.item_size_min}, {self.item_size_max}) x{self.item_limit} "
            f"@ {self.container_size}"
        )


class SolverConfig(BaseSchema):
    model_config = ConfigDict(frozen=True)

    id: Heuristic
    sorted: bool = False

    @property
    def name(self) -> str:
        return f"{self.id.value} Decreasing" if self.sorted else self.id.value


class ExperimentResult(BaseSchema):
    """One row per (solver, settings, iteration).

    ``quality`` is None when the instance was empty or the iteration failed.
    """

    solver_id: Heuristic
    sorted: bool
    item_size_min: int
    item_size_max: int
    item_limit: int
    container_size: int
    iteration: int = Field(ge=0)
    containers_used: int | None = None
    optimal_container_count: int | None = None
    quality: float | None = None
    duration_us: int | None = None
    error: str | None = None

    @property
    def solver_name(self) -> str:
        return f"{self.solver_id.value} Decreasing" if self.sorted else self.solver_id.value

    @property
    def failed(self) -> bool:
        return self.error is not None
