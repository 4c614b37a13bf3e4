"""Experiments layer: host glue, seeded runs and the CLI."""

from followflee.experiments.experiment import SimulationResult, run_experiment
from followflee.experiments.host import build_graph, populate

__all__ = [
    "SimulationResult",
    "build_graph",
    "populate",
    "run_experiment",
]
