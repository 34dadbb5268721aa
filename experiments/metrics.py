"""Result collection and export for packing experiments.

JSON and CSV exports carry the same fields. CSV cells hold the string form of
each value: None becomes an empty cell and booleans are written as True/False.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any

from binpack_core.schemas import ExperimentResult

RESULT_FIELDS = [
    'solver_id', 'sorted', 'item_size_min', 'item_size_max',
    'item_limit', 'container_size', 'iteration', 'containers_used',
    'optimal_container_count', 'quality', 'duration_us', 'error',
]


class ResultCollector:
    def __init__(self):
        self.results: list[ExperimentResult] = []

    def __len__(self) -> int:
        return len(self.results)

    def record(self, result: ExperimentResult) -> None:
        self.results.append(result)

    def records(self) -> list[dict[str, Any]]:
        return [result.to_dict() for result in self.results]

    def export_jsonl(self, path: str | Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            for record in self.records():
                json.dump(record, f)
                f.write('\n')

    def export_json(self, path: str | Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(self.records(), f, indent=2)

    def export_csv(self, path: str | Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=RESULT_FIELDS)
            writer.writeheader()
            for record in self.records():
                writer.writerow(record)


def load_results(path: str | Path) -> list[ExperimentResult]:
    """Load results written by ``ResultCollector.export_jsonl``."""
    results = []
    with open(path, 'r') as f:
        for line in f:
            if line.strip():
                results.append(ExperimentResult.from_json(line))
    return results
