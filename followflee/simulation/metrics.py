"""Population summary metrics computed at generation boundaries."""

from __future__ import annotations

import numpy as np

from followflee.config.constants import (
    ACTIONS_ATTR,
    COOPERATOR,
    DEFECTOR,
    MAX_GENOME,
    SCORE_ATTR,
    STRATEGY_ATTR,
)
from followflee.domain.graph import NodeGraph


def genome_entropy(genomes: np.ndarray) -> float:
    """Shannon entropy (bits) of the genome distribution; 0.0 for no agents."""
    if genomes.size == 0:
        return 0.0
    counts = np.bincount(genomes, minlength=MAX_GENOME + 1)
    p = counts[counts > 0] / genomes.size
    return float(-(p * np.log2(p)).sum())


def summarize_population(
    graph: NodeGraph, agents: list[int], generation: int
) -> dict[str, int | float | None]:
    """Return one generation-log row describing the current agents.

    Score statistics are NaN (mean, variance) or None (min, max) when the
    population is empty.
    """
    strategies = np.array([graph.get_attr(a, STRATEGY_ATTR) for a in agents], dtype=np.int64)
    genomes = np.array([graph.get_attr(a, ACTIONS_ATTR) for a in agents], dtype=np.int64)
    scores = np.array([graph.get_attr(a, SCORE_ATTR) for a in agents], dtype=np.int64)
    n_agents = len(agents)
    return {
        "generation": generation,
        "n_agents": n_agents,
        "n_cooperators": int(np.count_nonzero(strategies == COOPERATOR)),
        "n_defectors": int(np.count_nonzero(strategies == DEFECTOR)),
        "mean_score": float(scores.mean()) if n_agents else float("nan"),
        "score_variance": float(scores.var()) if n_agents else float("nan"),
        "min_score": int(scores.min()) if n_agents else None,
        "max_score": int(scores.max()) if n_agents else None,
        "distinct_genomes": int(np.unique(genomes).size),
        "genome_entropy": genome_entropy(genomes),
    }
