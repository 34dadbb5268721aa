"""Random workload generation with a known optimal container count.

Instances are built by filling conceptual containers one after another, so
every container is packed to exactly ``container_size``. The optimal count is
therefore known without solving; the items are shuffled afterwards so the
construction order cannot be exploited by online heuristics.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from .containers import Item
from .errors import ConfigurationError
from .schemas import ProblemSettings


@dataclass
class GeneratorResult:
    items: list[Item]
    optimal_container_count: int
    fill_order: list[Item] = field(default_factory=list)

    @property
    def total_size(self) -> int:
        return sum(item.size for item in self.items)


def _check_settings(settings: ProblemSettings) -> None:
    if settings.item_size_min >= settings.item_size_max:
        raise ConfigurationError(
            f"item_size_min ({settings.item_size_min}) must be less than "
            f"item_size_max ({settings.item_size_max})"
        )
    if settings.container_size <= 0:
        raise ConfigurationError(
            f"container_size must be positive, got {settings.container_size}"
        )


def generate(settings: ProblemSettings, rng: random.Random) -> GeneratorResult:
    """Generate a shuffled instance together with its optimal container count.

    Args:
        settings: Size range, item count and container capacity.
        rng: Random source used for both sizes and the final shuffle.

    Returns:
        GeneratorResult with the shuffled items, the optimum and the
        pre-shuffle fill order.

    Raises:
        ConfigurationError: If the size range is empty or the capacity is
            not positive.
    """

    _check_settings(settings)
    capacity = settings.container_size

    fill_order: list[Item] = []
    optimal = 0
    current_fill = 0
    container_open = False
    for index in range(settings.item_limit):
        size = rng.randrange(settings.item_size_min, settings.item_size_max)
        last = index == settings.item_limit - 1
        if current_fill + size > capacity or last:
            size = capacity - current_fill

        if not container_open:
            optimal += 1
            container_open = True

        fill_order.append(Item(size))
        current_fill = (current_fill + size) % capacity
        if current_fill == 0 and size > 0:
            container_open = False

    items = list(fill_order)
    rng.shuffle(items)
    return GeneratorResult(
        items=items,
        optimal_container_count=optimal,
        fill_order=fill_order,
    )


def uniform_items(settings: ProblemSettings, rng: random.Random) -> list[Item]:
    """Plain uniform sizes in ``[item_size_min, item_size_max)``, no known optimum."""

    _check_settings(settings)
    return [
        Item(rng.randrange(settings.item_size_min, settings.item_size_max))
        for _ in range(settings.item_limit)
    ]
