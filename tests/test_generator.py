import random
from collections import Counter

import pytest
from pydantic import ValidationError

from binpack_core.errors import ConfigurationError
from binpack_core.generator import generate, uniform_items
from binpack_core.heuristics import first_fit, next_fit
from binpack_core.schemas import ProblemSettings


def _settings(**overrides) -> ProblemSettings:
    data = {"item_size_min": 1, "item_size_max": 40, "item_limit": 100, "container_size": 100}
    data.update(overrides)
    return ProblemSettings(**data)


def _reconstruct_groups(fill_order, capacity):
    """Split the construction order into consecutive full containers."""
    groups = []
    fill = 0
    current = []
    for item in fill_order:
        current.append(item)
        fill += item.size
        assert fill <= capacity
        if fill == capacity:
            groups.append(current)
            current = []
            fill = 0
    return groups, current


def test_generate_deterministic_with_seed():
    settings = _settings()
    a = generate(settings, random.Random(123))
    b = generate(settings, random.Random(123))
    assert a.items == b.items
    assert a.optimal_container_count == b.optimal_container_count


def test_generate_item_count_and_shuffle_preserves_sizes():
    result = generate(_settings(), random.Random(1))
    assert len(result.items) == 100
    assert Counter(i.size for i in result.items) == Counter(i.size for i in result.fill_order)


@pytest.mark.parametrize("seed", range(25))
@pytest.mark.parametrize(
    "overrides",
    [
        {},
        {"item_size_min": 0, "item_size_max": 100, "item_limit": 500, "container_size": 400},
        {"item_size_min": 50, "item_size_max": 200, "item_limit": 30, "container_size": 100},
        {"item_size_min": 0, "item_size_max": 2, "item_limit": 10, "container_size": 3},
        {"item_limit": 1},
    ],
)
def test_optimal_count_is_achievable(seed, overrides):
    settings = _settings(**overrides)
    result = generate(settings, random.Random(seed))

    groups, leftover = _reconstruct_groups(result.fill_order, settings.container_size)

    # the final item always closes its container
    assert leftover == []
    assert len(groups) == result.optimal_container_count
    assert result.total_size == settings.container_size * result.optimal_container_count


@pytest.mark.parametrize("seed", range(10))
def test_heuristics_never_beat_optimum(seed):
    settings = _settings(item_size_min=5, item_size_max=60, item_limit=300)
    result = generate(settings, random.Random(seed))
    for pack in (next_fit, first_fit):
        assert len(pack(result.items, settings.container_size)) >= result.optimal_container_count


def test_zero_items():
    result = generate(_settings(item_limit=0), random.Random(0))
    assert result.items == []
    assert result.optimal_container_count == 0


def test_single_item_fills_container():
    result = generate(_settings(item_limit=1), random.Random(0))
    assert [i.size for i in result.items] == [100]
    assert result.optimal_container_count == 1


def test_last_item_clamped_to_remaining_capacity():
    result = generate(_settings(item_size_min=1, item_size_max=2, item_limit=3, container_size=10), random.Random(0))
    assert [i.size for i in result.fill_order] == [1, 1, 8]
    assert result.optimal_container_count == 1


def test_overflowing_draw_clamped():
    # every draw is 7, so the second item of each container is clamped to 3
    result = generate(_settings(item_size_min=7, item_size_max=8, item_limit=5, container_size=10), random.Random(0))
    assert [i.size for i in result.fill_order] == [7, 3, 7, 3, 10]
    assert result.optimal_container_count == 3


def test_sizes_never_exceed_capacity():
    result = generate(_settings(item_size_min=90, item_size_max=500, item_limit=50), random.Random(3))
    assert all(i.size <= 100 for i in result.items)


def test_invalid_range_rejected_by_settings():
    with pytest.raises(ValidationError):
        _settings(item_size_min=10, item_size_max=10)


def test_invalid_range_rejected_by_generator():
    settings = ProblemSettings.model_construct(
        item_size_min=10, item_size_max=5, item_limit=3, container_size=10
    )
    with pytest.raises(ConfigurationError):
        generate(settings, random.Random(0))


def test_uniform_items_within_range():
    settings = _settings(item_size_min=3, item_size_max=9, item_limit=200)
    items = uniform_items(settings, random.Random(4))
    assert len(items) == 200
    assert all(3 <= i.size < 9 for i in items)
