"""Birth-death replacement: the worst agents die, the best are cloned.

Both strategies run in two phases. The K lowest-scoring agents are vacated
first; then each of the K highest-scoring agents (attributes captured before
any removal) places one clone into an empty cell. Cells vacated in the same
round are never chosen as neighbour targets, only as random fallbacks. Population size is
preserved exactly and the returned agent list is "survivors + clones".
"""

from __future__ import annotations

from collections.abc import Callable
from random import Random

from followflee.config.constants import SCORE_ATTR
from followflee.config.types import ReplacementMode
from followflee.domain.cells import CellAttrs, EmptyCells, clear_attrs, read_attrs, write_attrs
from followflee.domain.graph import NodeGraph
from followflee.errors import ModelIntegrityError

ReplacementFn = Callable[[NodeGraph, list[int], EmptyCells, int, Random], list[int]]


def sort_agents_by_score(graph: NodeGraph, agents: list[int]) -> list[int]:
    """Return agents ordered by descending score; equal scores keep their order."""
    return sorted(agents, key=lambda agent_id: graph.get_attr(agent_id, SCORE_ATTR), reverse=True)


def _vacate_worst(
    graph: NodeGraph, agents: list[int], empty: EmptyCells, agents_to_replace: int
) -> tuple[list[int], list[tuple[int, CellAttrs]], set[int]]:
    """Empty the worst cells; return survivors, best (parent_id, attrs) and vacated ids."""
    if not 0 <= agents_to_replace <= len(agents):
        raise ModelIntegrityError(
            f"cannot replace {agents_to_replace} agents out of {len(agents)}"
        )
    ranked = sort_agents_by_score(graph, agents)
    parents = [(agent_id, read_attrs(graph, agent_id)) for agent_id in ranked[:agents_to_replace]]
    cutoff = len(ranked) - agents_to_replace
    vacated = set(ranked[cutoff:])
    for agent_id in ranked[cutoff:]:
        clear_attrs(graph, agent_id)
        empty.add(agent_id)
    return ranked[:cutoff], parents, vacated


def _place_clone(graph: NodeGraph, empty: EmptyCells, target_id: int, attrs: CellAttrs) -> int:
    empty.remove(target_id)
    write_attrs(graph, target_id, attrs)
    return target_id


def simple_bd(
    graph: NodeGraph,
    agents: list[int],
    empty: EmptyCells,
    agents_to_replace: int,
    rng: Random,
) -> list[int]:
    """Clone the best agents into uniformly random empty cells anywhere."""
    survivors, parents, _ = _vacate_worst(graph, agents, empty, agents_to_replace)
    clones = [_place_clone(graph, empty, empty.choice(rng), attrs) for _, attrs in parents]
    return survivors + clones


def neighbour_bd(
    graph: NodeGraph,
    agents: list[int],
    empty: EmptyCells,
    agents_to_replace: int,
    rng: Random,
) -> list[int]:
    """Clone the best agents next to their parent when possible.

    A neighbour vacated in this round does not count as free. Falls back to a
    uniformly random empty cell (vacated ones included) when the parent has no
    free neighbour.
    """
    survivors, parents, vacated = _vacate_worst(graph, agents, empty, agents_to_replace)
    clones: list[int] = []
    for parent_id, attrs in parents:
        free_neighbours = [
            n for n in graph.neighbours(parent_id) if n in empty and n not in vacated
        ]
        if free_neighbours:
            target_id = free_neighbours[rng.randint(0, len(free_neighbours) - 1)]
        else:
            target_id = empty.choice(rng)
        clones.append(_place_clone(graph, empty, target_id, attrs))
    return survivors + clones


REPLACEMENT_STRATEGIES: dict[ReplacementMode, ReplacementFn] = {
    ReplacementMode.SIMPLE_BD: simple_bd,
    ReplacementMode.NEIGHBOUR_BD: neighbour_bd,
}


def replacement_strategy(mode: ReplacementMode) -> ReplacementFn:
    try:
        return REPLACEMENT_STRATEGIES[mode]
    except KeyError:
        raise ModelIntegrityError(f"the replacement mode {mode!r} is invalid") from None
