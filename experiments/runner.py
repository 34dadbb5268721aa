"""Experiment runner sweeping solvers x settings x iterations."""

from __future__ import annotations

import itertools
import logging
import random
import signal
import time
from typing import Any

from tqdm import tqdm

from binpack_core.errors import InvalidPackingError, UnsatisfiableItemError
from binpack_core.generator import generate
from binpack_core.heuristics import create_solver, validate_packing
from binpack_core.schemas import ExperimentResult, ProblemSettings, SolverConfig

from experiments.artifacts import ArtifactManager
from experiments.config import ExperimentConfig
from experiments.failure_taxonomy import FailureAnalyzer
from experiments.metrics import ResultCollector
from experiments.summary import export_summary_csv, export_summary_json, summarize

logger = logging.getLogger(__name__)

MAX_SEED = 2_147_483_647


class ExperimentRunner:
    """Coordinates generation, solving, timing and export for a sweep."""

    def __init__(self, config: ExperimentConfig, progress: bool = True):
        self.config = config
        self.progress = progress
        self.artifacts: ArtifactManager | None = None
        self.collector = ResultCollector()
        self.failures = FailureAnalyzer()
        self.interrupted = False
        self._rng = random.Random(config.seed)

    def _setup_signal_handlers(self) -> dict[int, Any]:
        """Setup graceful shutdown on Ctrl+C; returns the previous handlers."""
        def signal_handler(signum: int, frame: Any) -> None:
            tqdm.write("\n⚠️  Interrupt received. Finishing current iteration and shutting down...")
            self.interrupted = True

        previous = {}
        for signum in (signal.SIGINT, signal.SIGTERM):
            previous[signum] = signal.getsignal(signum)
            signal.signal(signum, signal_handler)
        return previous

    def run_iteration(
        self,
        solver_config: SolverConfig,
        settings: ProblemSettings,
        iteration: int,
        rng: random.Random,
    ) -> ExperimentResult:
        """Generate one instance, solve it and measure the solve call.

        Generation is outside the timed window; decreasing-order sorting is
        part of the solver and therefore inside it.
        """
        instance = generate(settings, rng)
        solver = create_solver(solver_config, settings.container_size)

        row: dict[str, Any] = {
            "solver_id": solver_config.id,
            "sorted": solver_config.sorted,
            "item_size_min": settings.item_size_min,
            "item_size_max": settings.item_size_max,
            "item_limit": settings.item_limit,
            "container_size": settings.container_size,
            "iteration": iteration,
            "optimal_container_count": instance.optimal_container_count,
        }

        try:
            start = time.perf_counter_ns()
            containers = solver.solve(instance.items)
            duration_us = (time.perf_counter_ns() - start) // 1000
            if self.config.validate_packings:
                validate_packing(instance.items, containers)
        except (UnsatisfiableItemError, InvalidPackingError) as e:
            failure_type = self.failures.record_failure(e)
            logger.warning(
                f"{solver.name} failed on iteration {iteration} "
                f"({settings.label()}): {e}"
            )
            return ExperimentResult(**row, error=failure_type.value)

        optimal = instance.optimal_container_count
        return ExperimentResult(
            **row,
            containers_used=len(containers),
            quality=len(containers) / optimal if optimal > 0 else None,
            duration_us=duration_us,
        )

    def run_sweep(self) -> list[ExperimentResult]:
        """Run every (solver, settings, iteration) combination.

        Every solver packs the same instance for a given (settings, iteration)
        pair, so per-iteration results can be compared across solvers.

        Returns:
            One ExperimentResult per combination, in sweep order
        """
        seeds = [
            [self._rng.randrange(MAX_SEED) for _ in range(self.config.iterations)]
            for _ in self.config.settings
        ]
        combinations = list(itertools.product(
            self.config.solvers, enumerate(self.config.settings)
        ))
        total = len(combinations) * self.config.iterations

        pbar = tqdm(
            total=total,
            desc="📦 Sweep",
            unit="run",
            ncols=100,
            disable=not self.progress,
        )

        for solver_config, (setting_index, settings) in combinations:
            pbar.set_postfix({"Solver": solver_config.name, "Items": settings.item_limit})
            for iteration in range(self.config.iterations):
                if self.interrupted:
                    break
                rng = random.Random(seeds[setting_index][iteration])
                self.collector.record(
                    self.run_iteration(solver_config, settings, iteration, rng)
                )
                pbar.update(1)
            if self.interrupted:
                tqdm.write(f"\n⚠️  Stopping after {len(self.collector)} runs")
                break

        pbar.close()
        return list(self.collector.results)

    def run(self) -> dict[str, Any]:
        """Run the sweep and write all artifacts.

        Returns:
            Summary dictionary with run statistics
        """
        self.artifacts = ArtifactManager(self.config)
        self.artifacts.snapshot_config()

        print(f"🚀 Starting experiment: {self.config.run_id}")
        print(f"   Solvers: {', '.join(s.name for s in self.config.solvers)}")
        print(f"   Settings: {len(self.config.settings)}")
        print(f"   Iterations: {self.config.iterations}")
        print()

        previous_handlers = self._setup_signal_handlers()
        try:
            results = self.run_sweep()
        finally:
            for signum, handler in previous_handlers.items():
                signal.signal(signum, handler)

        return self._finalize_run(results)

    def _finalize_run(self, results: list[ExperimentResult]) -> dict[str, Any]:
        self.collector.export_jsonl(self.artifacts.results_path)
        self.collector.export_csv(self.artifacts.results_csv_path)

        summaries = summarize(results)
        export_summary_json(summaries, self.artifacts.summary_path)
        export_summary_csv(summaries, self.artifacts.summary_csv_path)

        if self.config.plots:
            self._generate_plots(summaries)
        self._generate_report()

        expected = len(self.config.solvers) * len(self.config.settings) * self.config.iterations
        summary = {
            "run_id": self.config.run_id,
            "status": "interrupted" if self.interrupted else "completed",
            "runs_completed": len(results),
            "runs_expected": expected,
            "failures": self.failures.get_failure_stats(),
            "run_dir": str(self.artifacts.run_dir),
        }

        print(f"\n📊 Run Summary:")
        print(f"   Run ID: {summary['run_id']}")
        print(f"   Status: {summary['status']}")
        print(f"   Runs: {summary['runs_completed']}/{summary['runs_expected']}")
        if self.failures.total:
            print(f"   Failures: {self.failures.get_top_failures()}")
        print(f"   Artifacts: {self.artifacts.run_dir}")

        return summary

    def _generate_plots(self, summaries: list[dict[str, Any]]) -> None:
        from experiments.plotting import PlotGenerator

        plotter = PlotGenerator()
        plotter.plot_quality_distribution(
            self.collector.records(), self.artifacts.plots_dir / "quality.png"
        )
        plotter.plot_duration_scaling(summaries, self.artifacts.plots_dir / "duration.png")

    def _generate_report(self) -> None:
        from experiments.report import ReportGenerator

        generator = ReportGenerator(
            self.artifacts.summary_path, self.artifacts.plots_dir, self.config.to_dict()
        )
        generator.generate_markdown(self.artifacts.report_path)
