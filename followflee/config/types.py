"""Configuration dataclasses for the follow/flee model and its run driver.

All frozen dataclasses that parameterise the per-generation model, the
initial population and a full simulation run live here.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from followflee.config.coerce import coerce_float, coerce_int, coerce_str
from followflee.config.constants import (
    NUM_GENERATIONS,
    REP_MODE_KEY,
    REP_RATE_KEY,
    STEPS_PER_GEN_KEY,
)
from followflee.errors import ModelIntegrityError

__all__ = [
    "ModelConfig",
    "PopulationConfig",
    "ReplacementMode",
    "SimulationConfig",
    "Topology",
    "parse_replacement_mode",
    "parse_topology",
]

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class ReplacementMode(Enum):
    """Birth-death strategy applied once at the end of every generation."""

    SIMPLE_BD = "simpleBD"
    NEIGHBOUR_BD = "neighbourBD"


class Topology(Enum):
    """Regular host graphs the run driver knows how to build."""

    RING = "ring"
    TORUS = "torus"
    RANDOM_REGULAR = "random_regular"


def parse_replacement_mode(raw_rep_mode: object) -> ReplacementMode:
    """Parse a replacement-mode identifier.

    An unknown identifier is fatal: the generation loop has no meaningful
    way to continue without a replacement strategy.
    """
    if isinstance(raw_rep_mode, ReplacementMode):
        return raw_rep_mode
    try:
        return ReplacementMode(raw_rep_mode)
    except ValueError as exc:
        valid = ", ".join(mode.value for mode in ReplacementMode)
        raise ModelIntegrityError(
            f"the replacement mode {raw_rep_mode!r} is invalid; must be one of {valid}"
        ) from exc


def parse_topology(raw_topology: str) -> Topology:
    """Parse topology name from CLI/config."""
    try:
        return Topology(raw_topology)
    except ValueError as exc:
        valid = ", ".join(t.value for t in Topology)
        raise ValueError(f"topology must be one of {valid}") from exc


# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ModelConfig:
    """Per-generation model parameters, resolved once before the first generation."""

    rep_mode: ReplacementMode = ReplacementMode.SIMPLE_BD
    rep_rate: float = 0.1
    """Fraction of the population replaced at the end of each generation."""
    steps_per_gen: int = 1
    """Scan+move sub-steps each agent takes per generation."""

    def __post_init__(self) -> None:
        if not isinstance(self.rep_mode, ReplacementMode):
            raise ModelIntegrityError(f"the replacement mode {self.rep_mode!r} is invalid")
        if not 0.0 <= self.rep_rate <= 1.0:
            raise ValueError("rep_rate must be in [0.0, 1.0]")
        if self.steps_per_gen < 0:
            raise ValueError("steps_per_gen must be >= 0")

    @classmethod
    def from_attrs(cls, attrs: Mapping[str, object]) -> ModelConfig:
        """Resolve a ModelConfig from the host's raw model attributes.

        ``repMode`` is parsed first and fails fatally; a missing or negative
        ``repRate``/``stepsPerGen`` raises :exc:`ValueError`.
        """
        rep_mode = parse_replacement_mode(coerce_str(attrs.get(REP_MODE_KEY, ""), REP_MODE_KEY))
        rep_rate = coerce_float(attrs.get(REP_RATE_KEY, -1.0), REP_RATE_KEY)
        steps_per_gen = coerce_int(attrs.get(STEPS_PER_GEN_KEY, -1), STEPS_PER_GEN_KEY)
        if rep_rate < 0.0:
            raise ValueError(f"{REP_RATE_KEY} is missing or negative")
        if steps_per_gen < 0:
            raise ValueError(f"{STEPS_PER_GEN_KEY} is missing or negative")
        return cls(rep_mode=rep_mode, rep_rate=rep_rate, steps_per_gen=steps_per_gen)

    def to_attrs(self) -> dict[str, object]:
        """Inverse of :meth:`from_attrs`, as handed to ``FollowFleeModel.init``."""
        return {
            REP_MODE_KEY: self.rep_mode.value,
            REP_RATE_KEY: self.rep_rate,
            STEPS_PER_GEN_KEY: self.steps_per_gen,
        }


@dataclass(frozen=True)
class PopulationConfig:
    """Initial occupancy of the host graph."""

    density: float = 0.5
    """Fraction of nodes holding an agent."""
    cooperator_fraction: float = 0.5
    """Fraction of agents that start as cooperators."""

    def __post_init__(self) -> None:
        if not 0.0 <= self.density <= 1.0:
            raise ValueError("density must be in [0.0, 1.0]")
        if not 0.0 <= self.cooperator_fraction <= 1.0:
            raise ValueError("cooperator_fraction must be in [0.0, 1.0]")


@dataclass(frozen=True)
class SimulationConfig:
    """Runtime parameters for one seeded simulation run."""

    topology: Topology = Topology.TORUS
    size: int = 20
    """Torus side length, or node count for ring and random-regular graphs."""
    degree: int = 4
    """Node degree; only used by the random-regular topology."""
    population: PopulationConfig = field(default_factory=PopulationConfig)
    model: ModelConfig = field(default_factory=ModelConfig)
    generations: int = NUM_GENERATIONS
    seed: int = 0
    out_dir: Path | None = None

    def __post_init__(self) -> None:
        if self.topology == Topology.TORUS and self.size < 3:
            raise ValueError("torus size must be >= 3")
        if self.topology == Topology.RING and self.size < 3:
            raise ValueError("ring size must be >= 3")
        if self.topology == Topology.RANDOM_REGULAR:
            if self.degree < 1:
                raise ValueError("degree must be >= 1")
            if self.degree >= self.size:
                raise ValueError("degree must be < size")
            if (self.degree * self.size) % 2 != 0:
                raise ValueError("degree * size must be even for a random regular graph")
        if self.generations < 0:
            raise ValueError("generations must be >= 0")
