from pathlib import Path
from unittest.mock import patch

import yaml
from typer.testing import CliRunner

from experiments.cli import app

runner = CliRunner()


def _write_config(tmp_path: Path, **overrides) -> Path:
    config_data = {
        "run_id": "cli_run",
        "seed": 1,
        "solvers": [{"id": "Next Fit", "sorted": False}, {"id": "First Fit", "sorted": True}],
        "settings": [{"item_size_min": 1, "item_size_max": 30, "item_limit": 40, "container_size": 100}],
        "iterations": 2,
        "artifact_dir": str(tmp_path / "artifacts"),
    }
    config_data.update(overrides)
    config_file = tmp_path / "config.yaml"
    with open(config_file, "w") as f:
        yaml.dump(config_data, f)
    return config_file


def test_run_passes_config_to_runner(tmp_path):
    config_file = _write_config(tmp_path)

    with patch("experiments.cli.ExperimentRunner") as mock_runner:
        mock_runner.return_value.run.return_value = {"status": "completed"}
        result = runner.invoke(app, ["run", str(config_file), "--no-progress"])

    assert result.exit_code == 0
    args, kwargs = mock_runner.call_args
    config = args[0]
    assert config.run_id == "cli_run"
    assert kwargs["progress"] is False
    assert "completed successfully" in result.output


def test_run_end_to_end(tmp_path):
    config_file = _write_config(tmp_path, plots=False)

    result = runner.invoke(app, ["run", str(config_file), "--no-progress"])

    assert result.exit_code == 0
    assert (tmp_path / "artifacts" / "cli_run" / "results.jsonl").exists()


def test_run_missing_config(tmp_path):
    result = runner.invoke(app, ["run", str(tmp_path / "missing.yaml")])
    assert result.exit_code == 1


def test_run_invalid_config(tmp_path):
    config_file = _write_config(
        tmp_path,
        settings=[{"item_size_min": 30, "item_size_max": 1, "item_limit": 40, "container_size": 100}],
    )
    with patch("experiments.cli.ExperimentRunner") as mock_runner:
        result = runner.invoke(app, ["run", str(config_file)])

    assert result.exit_code == 1
    mock_runner.assert_not_called()


def test_compare_scenario():
    result = runner.invoke(app, ["compare", "3", "4", "5", "6", "5", "4", "--capacity", "10"])

    assert result.exit_code == 0
    assert "Next Fit: 4 containers [7, 5, 6, 9]" in result.output
    assert "First Fit: 3 containers [7, 10, 10]" in result.output
    assert "First Fit Decreasing: 3 containers [10, 10, 7]" in result.output


def test_compare_oversized_item():
    result = runner.invoke(app, ["compare", "3", "12", "--capacity", "10"])

    assert result.exit_code == 0
    assert result.output.count("won't fit into an empty container") == 4


def test_sample_reports_every_heuristic():
    result = runner.invoke(app, ["sample", "--item-limit", "300", "--seed", "3"])

    assert result.exit_code == 0
    assert "Results for 300 items, capacity 400" in result.output
    for name in ["Next Fit:", "Next Fit Decreasing:", "First Fit:", "First Fit Decreasing:"]:
        assert name in result.output


def test_sample_invalid_range():
    result = runner.invoke(app, ["sample", "--item-size-min", "10", "--item-size-max", "10"])
    assert result.exit_code == 1


def test_report_and_list_runs(tmp_path):
    config_file = _write_config(tmp_path, plots=False)
    artifact_dir = str(tmp_path / "artifacts")
    assert runner.invoke(app, ["run", str(config_file), "--no-progress"]).exit_code == 0

    report_path = tmp_path / "artifacts" / "cli_run" / "report.md"
    report_path.unlink()

    result = runner.invoke(app, ["report", "cli_run", "--artifact-dir", artifact_dir])
    assert result.exit_code == 0
    assert report_path.exists()

    result = runner.invoke(app, ["list-runs", "--artifact-dir", artifact_dir])
    assert result.exit_code == 0
    assert "cli_run" in result.output
    assert "Results: 4" in result.output


def test_report_unknown_run(tmp_path):
    result = runner.invoke(app, ["report", "nope", "--artifact-dir", str(tmp_path)])
    assert result.exit_code == 1
