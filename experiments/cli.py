"""CLI interface for running packing experiments."""

from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import Optional

import typer
import yaml
from pydantic import ValidationError

from binpack_core.containers import Item
from binpack_core.errors import ConfigurationError, UnsatisfiableItemError
from binpack_core.generator import uniform_items
from binpack_core.heuristics import create_solver
from binpack_core.schemas import Heuristic, ProblemSettings, SolverConfig

from experiments.config import load_config
from experiments.report import ReportGenerator
from experiments.runner import ExperimentRunner

app = typer.Typer(help="Bin Packing Experiment CLI")


@app.command()
def run(
    config_path: str = typer.Argument(..., help="Path to experiment YAML/JSON config"),
    log_level: str = typer.Option("WARNING", help="Logging level"),
    no_progress: bool = typer.Option(False, "--no-progress", help="Hide the progress bar"),
) -> None:
    """Run a complete sweep from a config file."""
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        config = load_config(config_path)
        runner = ExperimentRunner(config, progress=not no_progress)
        summary = runner.run()
    except FileNotFoundError as e:
        typer.secho(f"❌ Config file not found: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    except ConfigurationError as e:
        typer.secho(f"❌ Invalid config: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    if summary.get("status") == "completed":
        typer.secho("\n✅ Experiment completed successfully!", fg=typer.colors.GREEN)
    else:
        typer.secho("\n⚠️  Experiment incomplete", fg=typer.colors.YELLOW)


@app.command()
def report(
    run_id: str = typer.Argument(..., help="Run ID to generate report for"),
    artifact_dir: str = typer.Option("artifacts", help="Artifacts directory"),
) -> None:
    """Regenerate the Markdown report for a run."""
    run_dir = Path(artifact_dir) / run_id

    if not run_dir.exists():
        typer.secho(f"❌ Run not found: {run_id}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    summary_path = run_dir / "summary.json"
    config_path = run_dir / "config.yaml"

    if not summary_path.exists():
        typer.secho(f"❌ Summary not found for run: {run_id}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    if not config_path.exists():
        typer.secho(f"❌ Config not found for run: {run_id}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    with open(config_path, "r") as f:
        config = yaml.safe_load(f)

    md_path = run_dir / "report.md"
    ReportGenerator(summary_path, run_dir / "plots", config).generate_markdown(md_path)

    typer.secho("✅ Report generated successfully!", fg=typer.colors.GREEN)
    typer.echo(f"   Markdown: {md_path}")


@app.command()
def list_runs(
    artifact_dir: str = typer.Option("artifacts", help="Artifacts directory"),
) -> None:
    """List all experiment runs in artifacts directory."""
    artifacts_path = Path(artifact_dir)

    if not artifacts_path.exists():
        typer.secho(f"❌ Artifacts directory not found: {artifact_dir}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    run_dirs = [d for d in artifacts_path.iterdir() if d.is_dir()]

    if not run_dirs:
        typer.secho("No runs found.", fg=typer.colors.YELLOW)
        return

    typer.secho(f"\n📁 Found {len(run_dirs)} run(s):\n", fg=typer.colors.BLUE)

    for run_dir in sorted(run_dirs):
        results_path = run_dir / "results.jsonl"

        has_config = "✓" if (run_dir / "config.yaml").exists() else "✗"
        has_summary = "✓" if (run_dir / "summary.json").exists() else "✗"
        has_report = "✓" if (run_dir / "report.md").exists() else "✗"

        num_results = 0
        if results_path.exists():
            with open(results_path, "r") as f:
                num_results = sum(1 for line in f if line.strip())

        typer.echo(f"  {run_dir.name}")
        typer.echo(f"    Config: {has_config} | Summary: {has_summary} | Report: {has_report} | Results: {num_results}")


@app.command()
def compare(
    items: list[int] = typer.Argument(..., help="Item sizes, in arrival order"),
    capacity: int = typer.Option(..., "--capacity", "-c", help="Container capacity"),
) -> None:
    """Pack an explicit item list with every heuristic and print container fills."""
    if capacity <= 0:
        typer.secho(f"❌ Capacity must be positive, got {capacity}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    try:
        sequence = [Item(size) for size in items]
    except ConfigurationError as e:
        typer.secho(f"❌ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    _print_packings(sequence, capacity)


@app.command()
def sample(
    item_limit: int = typer.Option(5000, help="Number of items to draw"),
    item_size_min: int = typer.Option(0, help="Smallest item size (inclusive)"),
    item_size_max: int = typer.Option(100, help="Largest item size (exclusive)"),
    capacity: int = typer.Option(400, "--capacity", "-c", help="Container capacity"),
    seed: Optional[int] = typer.Option(None, help="Random seed"),
) -> None:
    """Draw uniform item sizes and compare heuristics on them."""
    try:
        settings = ProblemSettings(
            item_size_min=item_size_min,
            item_size_max=item_size_max,
            item_limit=item_limit,
            container_size=capacity,
        )
    except ValidationError as e:
        typer.secho(f"❌ Invalid settings: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    sequence = uniform_items(settings, random.Random(seed))
    typer.echo(f"Results for {len(sequence)} items, capacity {capacity}:")
    _print_packings(sequence, capacity, show_fills=False)


def _print_packings(sequence: list[Item], capacity: int, show_fills: bool = True) -> None:
    for heuristic in Heuristic:
        for is_sorted in (False, True):
            solver = create_solver(SolverConfig(id=heuristic, sorted=is_sorted), capacity)
            try:
                containers = solver.solve(sequence)
            except UnsatisfiableItemError as e:
                typer.secho(f"  {solver.name}: ❌ {e}", fg=typer.colors.RED)
                continue
            fills = f" {[c.used for c in containers]}" if show_fills else ""
            typer.echo(f"  {solver.name}: {len(containers)} containers{fills}")


if __name__ == "__main__":
    app()
