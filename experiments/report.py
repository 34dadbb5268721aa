import json
from datetime import datetime
from pathlib import Path

import yaml


def _fmt(value, spec: str = ".4f") -> str:
    if value is None:
        return "N/A"
    return format(value, spec)


class ReportGenerator:
    def __init__(self, summary_path: Path, plots_dir: Path, config: dict):
        self.summary_path = Path(summary_path)
        self.plots_dir = Path(plots_dir)
        self.config = config
        self.summaries = self._load_summary()
        self.kpis = self._calculate_kpis()

    def _load_summary(self) -> list[dict]:
        if not self.summary_path.exists():
            return []
        with open(self.summary_path, "r") as f:
            return json.load(f)

    def _calculate_kpis(self) -> dict:
        if not self.summaries:
            return {}

        scored = [s for s in self.summaries if s["quality_mean"] is not None]
        best = min(scored, key=lambda s: s["quality_mean"]) if scored else None

        return {
            "best_solver": best["solver"] if best else None,
            "best_quality": best["quality_mean"] if best else None,
            "total_runs": sum(s["runs"] for s in self.summaries),
            "total_failures": sum(s["failures"] for s in self.summaries),
            "total_excluded": sum(s["excluded"] for s in self.summaries),
        }

    def generate_markdown(self, output_path: Path) -> None:
        output_path = Path(output_path)

        run_id = self.config.get("run_id", "N/A")
        date = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

        rows = []
        for s in self.summaries:
            rows.append(
                f"| {s['solver']} | [{s['item_size_min']}, {s['item_size_max']}) "
                f"| {s['item_limit']} | {s['container_size']} | {s['runs']} "
                f"| {s['failures']} | {s['excluded']} | {_fmt(s['quality_mean'])} "
                f"| {_fmt(s['quality_max'])} | {_fmt(s['duration_us_mean'], '.1f')} |"
            )
        table = "\n".join(rows)

        plots = []
        if self.plots_dir.exists():
            for plot_file in sorted(self.plots_dir.glob("*.png")):
                title = plot_file.stem.replace("_", " ").title()
                plots.append(f"### {title}\n![{title}]({self.plots_dir.name}/{plot_file.name})")
        plots_section = "\n\n".join(plots) if plots else "No plots generated."

        md_content = f"""# Bin Packing Experiment Report

## Run Summary
- **Run ID:** {run_id}
- **Date:** {date}
- **Iterations per combination:** {self.config.get("iterations", "N/A")}
- **Seed:** {self.config.get("seed")}

## Key Performance Indicators
| Metric | Value | Note |
|--------|-------|------|
| Best Solver | {self.kpis.get('best_solver') or 'N/A'} | Lowest mean quality |
| Best Mean Quality | {_fmt(self.kpis.get('best_quality'))} | 1.0 = optimal |
| Total Runs | {self.kpis.get('total_runs', 0)} | |
| Failed Runs | {self.kpis.get('total_failures', 0)} | Item larger than a container |
| Excluded Runs | {self.kpis.get('total_excluded', 0)} | Empty instances, quality undefined |

## Results by Solver and Setting
| Solver | Sizes | Items | Capacity | Runs | Failures | Excluded | Mean Quality | Worst Quality | Mean Time (us) |
|--------|-------|-------|----------|------|----------|----------|--------------|---------------|----------------|
{table}

## Plots
{plots_section}

## Configuration
```yaml
{yaml.dump(self.config, default_flow_style=False, sort_keys=False)}
```
"""
        output_path.write_text(md_content)
