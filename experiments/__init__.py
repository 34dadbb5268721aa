"""
Experiments Module

Experiment configuration, sweep driver and CLI.

This module provides:
- YAML/JSON configuration loading
- Sweep driver over solvers x settings x iterations
- Result export (JSONL, JSON, CSV) and aggregation
- Artifact storage, plots and Markdown reports
"""

__version__ = "0.1.0"
