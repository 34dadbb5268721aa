"""Aggregation of experiment results per solver and problem setting."""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any

from binpack_core.schemas import ExperimentResult

logger = logging.getLogger(__name__)

GROUP_FIELDS = [
    "solver",
    "solver_id",
    "sorted",
    "item_size_min",
    "item_size_max",
    "item_limit",
    "container_size",
]

SUMMARY_FIELDS = GROUP_FIELDS + [
    "runs",
    "failures",
    "excluded",
    "quality_mean",
    "quality_min",
    "quality_max",
    "containers_mean",
    "optimal_mean",
    "duration_us_mean",
    "duration_us_min",
    "duration_us_max",
]


def _mean(values: list[float]) -> float | None:
    return sum(values) / len(values) if values else None


def _group_key(result: ExperimentResult) -> tuple[Any, ...]:
    return (
        result.solver_name,
        result.solver_id.value,
        result.sorted,
        result.item_size_min,
        result.item_size_max,
        result.item_limit,
        result.container_size,
    )


def summarize(results: list[ExperimentResult]) -> list[dict[str, Any]]:
    """Aggregate results per (solver, sorted, setting) group.

    Failed iterations are counted in ``failures`` and empty instances (whose
    quality is undefined) in ``excluded``; neither contributes to the quality
    or timing statistics.

    Args:
        results: Rows produced by the experiment driver

    Returns:
        One summary dict per group, in first-seen order
    """
    groups: dict[tuple[Any, ...], list[ExperimentResult]] = {}
    for result in results:
        groups.setdefault(_group_key(result), []).append(result)

    summaries = []
    for key, rows in groups.items():
        failures = [r for r in rows if r.failed]
        completed = [r for r in rows if not r.failed]
        scored = [r for r in completed if r.quality is not None]
        qualities = [r.quality for r in scored]
        durations = [r.duration_us for r in completed if r.duration_us is not None]

        if failures:
            logger.warning(
                f"{len(failures)} of {len(rows)} iterations failed for {key[0]} on "
                f"item_limit={key[5]}, container_size={key[6]}"
            )

        summary = dict(zip(GROUP_FIELDS, key))
        summary.update({
            "runs": len(rows),
            "failures": len(failures),
            "excluded": len(completed) - len(scored),
            "quality_mean": _mean(qualities),
            "quality_min": min(qualities) if qualities else None,
            "quality_max": max(qualities) if qualities else None,
            "containers_mean": _mean([r.containers_used for r in completed]),
            "optimal_mean": _mean([r.optimal_container_count for r in completed]),
            "duration_us_mean": _mean(durations),
            "duration_us_min": min(durations) if durations else None,
            "duration_us_max": max(durations) if durations else None,
        })
        summaries.append(summary)

    return summaries


def export_summary_csv(summaries: list[dict[str, Any]], output_path: Path) -> None:
    """Export summary rows to a CSV file."""
    with open(output_path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=SUMMARY_FIELDS)
        writer.writeheader()
        writer.writerows(summaries)


def export_summary_json(summaries: list[dict[str, Any]], output_path: Path) -> None:
    with open(output_path, "w") as f:
        json.dump(summaries, f, indent=2)
