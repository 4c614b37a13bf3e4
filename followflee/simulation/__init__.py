"""Simulation layer: per-generation model, run driver and generation log."""

from followflee.simulation.engine import run_generations
from followflee.simulation.metrics import genome_entropy, summarize_population
from followflee.simulation.model import FollowFleeModel
from followflee.simulation.persistence import flush_generation_columns

__all__ = [
    "FollowFleeModel",
    "flush_generation_columns",
    "genome_entropy",
    "run_generations",
    "summarize_population",
]
