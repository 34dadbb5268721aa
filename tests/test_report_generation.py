import json
from pathlib import Path

import pytest

from experiments.report import ReportGenerator


@pytest.fixture
def run_dir(tmp_path: Path) -> Path:
    summaries = [
        {
            "solver": "Next Fit", "solver_id": "Next Fit", "sorted": False,
            "item_size_min": 0, "item_size_max": 100, "item_limit": 500, "container_size": 400,
            "runs": 3, "failures": 0, "excluded": 0,
            "quality_mean": 1.31, "quality_min": 1.28, "quality_max": 1.35,
            "containers_mean": 82.0, "optimal_mean": 62.6,
            "duration_us_mean": 110.0, "duration_us_min": 95, "duration_us_max": 130,
        },
        {
            "solver": "First Fit Decreasing", "solver_id": "First Fit", "sorted": True,
            "item_size_min": 0, "item_size_max": 100, "item_limit": 500, "container_size": 400,
            "runs": 3, "failures": 1, "excluded": 0,
            "quality_mean": 1.0, "quality_min": 1.0, "quality_max": 1.0,
            "containers_mean": 63.0, "optimal_mean": 63.0,
            "duration_us_mean": 900.0, "duration_us_min": 850, "duration_us_max": 990,
        },
    ]
    (tmp_path / "plots").mkdir()
    (tmp_path / "plots" / "quality.png").write_bytes(b"png")
    with open(tmp_path / "summary.json", "w") as f:
        json.dump(summaries, f)
    return tmp_path


def test_kpis(run_dir: Path) -> None:
    generator = ReportGenerator(run_dir / "summary.json", run_dir / "plots", {"run_id": "r1"})
    assert generator.kpis["best_solver"] == "First Fit Decreasing"
    assert generator.kpis["total_runs"] == 6
    assert generator.kpis["total_failures"] == 1


def test_generate_markdown(run_dir: Path) -> None:
    config = {"run_id": "r1", "iterations": 3, "seed": 5}
    generator = ReportGenerator(run_dir / "summary.json", run_dir / "plots", config)
    md_path = run_dir / "report.md"
    generator.generate_markdown(md_path)

    content = md_path.read_text()
    assert "# Bin Packing Experiment Report" in content
    assert "**Run ID:** r1" in content
    assert "| Next Fit | [0, 100) | 500 | 400 | 3 | 0 | 0 | 1.3100 |" in content
    assert "![Quality](plots/quality.png)" in content


def test_missing_summary(tmp_path: Path) -> None:
    generator = ReportGenerator(tmp_path / "summary.json", tmp_path / "plots", {})
    assert generator.kpis == {}
    md_path = tmp_path / "report.md"
    generator.generate_markdown(md_path)
    assert "No plots generated." in md_path.read_text()
