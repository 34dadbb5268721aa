"""Experiment configuration with YAML support."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import yaml
from pydantic import Field, ValidationError

from binpack_core.errors import ConfigurationError
from binpack_core.schemas import BaseSchema, ProblemSettings, SolverConfig


def _default_run_id() -> str:
    return f"binpack_{datetime.now().strftime('%Y%m%d_%H%M%S')}"


class ExperimentConfig(BaseSchema):
    """Sweep definition: every solver is run on every setting ``iterations`` times."""

    run_id: str = Field(default_factory=_default_run_id)
    seed: int | None = None
    solvers: list[SolverConfig] = Field(min_length=1)
    settings: list[ProblemSettings] = Field(min_length=1)
    iterations: int = Field(ge=0)

    # Artifact management
    artifact_dir: str = "artifacts"
    validate_packings: bool = False
    plots: bool = True


def parse_config(data: object, source: str = "<config>") -> ExperimentConfig:
    if not data or not isinstance(data, dict):
        raise ConfigurationError(f"Empty or invalid configuration: {source}")
    try:
        return ExperimentConfig.from_dict(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration in {source}: {e}") from e


def load_config(path: str | Path) -> ExperimentConfig:
    """Load experiment configuration from a YAML or JSON file.

    Args:
        path: Path to the configuration file

    Returns:
        ExperimentConfig instance

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigurationError: If the file is empty, malformed or fails validation
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Malformed config file {path}: {e}") from e

    return parse_config(data, source=str(path))


def save_config(config: ExperimentConfig, path: str | Path) -> None:
    """Save experiment configuration to YAML file for reproducibility."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = config.to_dict()

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False, indent=2)
