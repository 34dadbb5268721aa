"""Artifact management for experiment runs."""

from __future__ import annotations

from pathlib import Path

from experiments.config import ExperimentConfig


class ArtifactManager:
    """Manages experiment artifacts: config snapshot, results, summaries and plots."""

    def __init__(self, config: ExperimentConfig):
        self.config = config
        self.run_dir = Path(config.artifact_dir) / config.run_id
        self.plots_dir = self.run_dir / "plots"

        self._create_directory_structure()

    def _create_directory_structure(self) -> None:
        """Create artifact directory structure for the run."""
        self.run_dir.mkdir(parents=True, exist_ok=True)
        self.plots_dir.mkdir(exist_ok=True)

    @property
    def config_path(self) -> Path:
        return self.run_dir / "config.yaml"

    @property
    def results_path(self) -> Path:
        return self.run_dir / "results.jsonl"

    @property
    def results_csv_path(self) -> Path:
        return self.run_dir / "results.csv"

    @property
    def summary_path(self) -> Path:
        return self.run_dir / "summary.json"

    @property
    def summary_csv_path(self) -> Path:
        return self.run_dir / "summary.csv"

    @property
    def report_path(self) -> Path:
        return self.run_dir / "report.md"

    def snapshot_config(self) -> None:
        """Save a snapshot of the configuration for reproducibility."""
        from experiments.config import save_config
        save_config(self.config, self.config_path)
