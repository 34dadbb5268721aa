"""Visualization and plotting for packing experiments."""

from __future__ import annotations

from pathlib import Path

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt


def _solver_label(record: dict) -> str:
    name = record['solver_id']
    return f"{name} Decreasing" if record.get('sorted') else name


class PlotGenerator:
    def _set_style(self) -> None:
        style = 'seaborn-v0_8-whitegrid' if 'seaborn-v0_8-whitegrid' in plt.style.available else 'ggplot'
        plt.style.use(style)

    def _reset_style(self) -> None:
        plt.style.use('default')

    def plot_quality_distribution(self, records: list[dict], save_path: str | Path) -> bool:
        """Box plot of quality ratios per solver. Rows without a quality are skipped."""
        save_path = Path(save_path)
        save_path.parent.mkdir(parents=True, exist_ok=True)

        by_solver: dict[str, list[float]] = {}
        for r in records:
            if r.get('quality') is not None:
                by_solver.setdefault(_solver_label(r), []).append(r['quality'])

        if not by_solver:
            return False

        self._set_style()
        labels = list(by_solver.keys())
        plt.figure(figsize=(10, 6))
        plt.boxplot([by_solver[label] for label in labels])
        plt.xticks(range(1, len(labels) + 1), labels)
        plt.axhline(1.0, color='g', linestyle='--', alpha=0.6, label='Optimal')
        plt.ylabel('Containers used / optimal', fontsize=12)
        plt.title('Packing Quality by Heuristic', fontsize=14, fontweight='bold')
        plt.legend(loc='best')
        plt.grid(True, alpha=0.3)
        plt.tight_layout()
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        plt.close()
        self._reset_style()
        return True

    def plot_duration_scaling(self, summaries: list[dict], save_path: str | Path) -> bool:
        """Mean solve time against item count, one line per solver."""
        save_path = Path(save_path)
        save_path.parent.mkdir(parents=True, exist_ok=True)

        series: dict[str, dict[int, list[float]]] = {}
        for s in summaries:
            if s.get('duration_us_mean') is None:
                continue
            points = series.setdefault(s['solver'], {})
            points.setdefault(s['item_limit'], []).append(s['duration_us_mean'])

        if not series:
            return False

        self._set_style()
        plt.figure(figsize=(10, 6))
        for solver, points in series.items():
            xs = sorted(points)
            ys = [sum(points[x]) / len(points[x]) for x in xs]
            plt.plot(xs, ys, marker='o', linewidth=2, label=solver)

        plt.xlabel('Items', fontsize=12)
        plt.ylabel('Mean solve time (us)', fontsize=12)
        plt.title('Solve Time Scaling', fontsize=14, fontweight='bold')
        plt.legend(loc='best')
        plt.grid(True, alpha=0.3)
        plt.tight_layout()
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        plt.close()
        self._reset_style()
        return True
