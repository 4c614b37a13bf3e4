"""Configuration layer: constants and typed config dataclasses."""

from followflee.config.constants import (
    COOPERATOR,
    DEFECTOR,
    EMPTY,
    FLUSH_THRESHOLD,
    MAX_GENOME,
    NUM_GENERATIONS,
)
from followflee.config.types import (
    ModelConfig,
    PopulationConfig,
    ReplacementMode,
    SimulationConfig,
    Topology,
    parse_replacement_mode,
    parse_topology,
)

__all__ = [
    "COOPERATOR",
    "DEFECTOR",
    "EMPTY",
    "FLUSH_THRESHOLD",
    "MAX_GENOME",
    "ModelConfig",
    "NUM_GENERATIONS",
    "PopulationConfig",
    "ReplacementMode",
    "SimulationConfig",
    "Topology",
    "parse_replacement_mode",
    "parse_topology",
]
