"""Item and container primitives shared by every heuristic."""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import ConfigurationError


@dataclass(frozen=True)
class Item:
    size: int

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ConfigurationError(f"Item size must be non-negative, got {self.size}")


@dataclass
class Container:
    """A single bin with a fixed capacity and a running fill level.

    ``items`` is bookkeeping only; fit decisions use ``used``.
    """

    capacity: int
    used: int = 0
    items: list[Item] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.capacity <= 0:
            raise ConfigurationError(
                f"Container capacity must be positive, got {self.capacity}"
            )
        if not 0 <= self.used <= self.capacity:
            raise ConfigurationError(
                f"Container fill must be within [0, {self.capacity}], got {self.used}"
            )

    @property
    def remaining(self) -> int:
        return self.capacity - self.used

    def fits(self, item: Item) -> bool:
        return self.used + item.size <= self.capacity

    def add(self, item: Item) -> Item | None:
        """Place ``item`` if it fits.

        Returns None when accepted, otherwise the rejected item with the
        container left untouched.
        """
        if not self.fits(item):
            return item
        self.used += item.size
        self.items.append(item)
        return None

    def __repr__(self) -> str:
        return f"Container([{self.used} / {self.capacity}], items={len(self.items)})"


def packed_volume(containers: list[Container]) -> int:
    return sum(container.used for container in containers)
