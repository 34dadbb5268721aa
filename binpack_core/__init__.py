"""
Bin Packing Core

One-dimensional bin packing primitives and heuristics.

This module provides:
- Item and Container primitives with a shared fit test
- Next Fit / First Fit heuristics and their Decreasing variants
- A workload generator with a known optimal container count
- Typed settings and result schemas
"""

__version__ = "0.1.0"

from .containers import Container, Item
from .errors import BinPackingError, ConfigurationError, UnsatisfiableItemError
from .generator import GeneratorResult, generate, uniform_items
from .heuristics import Heuristic, Solver, create_solver, first_fit, next_fit
from .schemas import ExperimentResult, ProblemSettings, SolverConfig

__all__ = [
    "Item",
    "Container",
    "BinPackingError",
    "ConfigurationError",
    "UnsatisfiableItemError",
    "GeneratorResult",
    "generate",
    "uniform_items",
    "Heuristic",
    "Solver",
    "create_solver",
    "next_fit",
    "first_fit",
    "ProblemSettings",
    "SolverConfig",
    "ExperimentResult",
]
