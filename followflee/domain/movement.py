"""Movement decision: genome decoding and free-cell scoring.

The genome picks one sub-policy per neighbourhood context. Each sub-policy
adds to the running score of every free cell; the agent then moves to a
best-scoring cell, breaking ties uniformly at random.
"""

from __future__ import annotations

from collections.abc import Sequence
from random import Random

from followflee.config.constants import ACTIONS_ATTR
from followflee.domain.cells import EmptyCells, move_agent
from followflee.domain.genome import (
    MovePolicy,
    cooperator_only_policy,
    decode_policy,
    defector_only_policy,
    mixed_cooperator_policy,
    mixed_defector_policy,
)
from followflee.domain.graph import NodeGraph
from followflee.domain.horizon import FreeCell, Horizon
from followflee.errors import ModelIntegrityError


def stay_still(free_cells: list[FreeCell], num_neighbours: int) -> None:
    """Penalise every cell but the agent's own (index 0)."""
    for cell in free_cells[1:]:
        cell.score -= num_neighbours


def follow(free_cells: list[FreeCell], graph: NodeGraph, neighbour_id: int) -> None:
    """+1 for free cells adjacent to ``neighbour_id``."""
    adjacent = graph.neighbours(neighbour_id)
    for cell in free_cells:
        if cell.node_id in adjacent:
            cell.score += 1


def flee(free_cells: list[FreeCell], graph: NodeGraph, neighbour_id: int) -> None:
    """+1 for free cells not adjacent to ``neighbour_id``."""
    adjacent = graph.neighbours(neighbour_id)
    for cell in free_cells:
        if cell.node_id not in adjacent:
            cell.score += 1


def randomize(free_cells: list[FreeCell], num_neighbours: int, rng: Random) -> None:
    """Perturb every cell by a uniform draw in [-num_neighbours, num_neighbours]."""
    for cell in free_cells:
        cell.score += rng.randint(-num_neighbours, num_neighbours)


def eval_free_cells(
    free_cells: list[FreeCell],
    graph: NodeGraph,
    neighbours: Sequence[int],
    policy: MovePolicy | int,
    rng: Random,
) -> None:
    """Apply one sub-policy, reacting to ``neighbours``, to the free-cell scores."""
    policy = decode_policy(int(policy))
    if policy is MovePolicy.STAY:
        stay_still(free_cells, len(neighbours))
    elif policy is MovePolicy.FOLLOW:
        for neighbour_id in neighbours:
            follow(free_cells, graph, neighbour_id)
    elif policy is MovePolicy.FLEE:
        for neighbour_id in neighbours:
            flee(free_cells, graph, neighbour_id)
    elif policy is MovePolicy.RANDOM:
        randomize(free_cells, len(neighbours), rng)
    else:
        raise ModelIntegrityError(f"invalid action ({policy})")


def best_free_cells(free_cells: list[FreeCell]) -> list[int]:
    """Return ids of every free cell sharing the highest score, in horizon order."""
    best_score: int | None = None
    best_ids: list[int] = []
    for cell in free_cells:
        if best_score is None or cell.score > best_score:
            best_score = cell.score
            best_ids = [cell.node_id]
        elif cell.score == best_score:
            best_ids.append(cell.node_id)
    return best_ids


def choose_target(graph: NodeGraph, agent_id: int, horizon: Horizon, rng: Random) -> int:
    """Score ``horizon.free_cells`` for ``agent_id`` and return the chosen cell.

    Returns ``agent_id`` itself when there is nowhere else to go.
    """
    free_cells = horizon.free_cells
    if not free_cells or free_cells[0].node_id != agent_id:
        raise ModelIntegrityError(f"horizon was not scanned for agent {agent_id}")
    if len(free_cells) == 1:
        return agent_id

    num_neighbours = graph.degree - (len(free_cells) - 1)
    if num_neighbours == 0:
        # alone: wander without consulting the genome
        return free_cells[rng.randint(0, len(free_cells) - 1)].node_id

    actions = graph.get_attr(agent_id, ACTIONS_ATTR)
    if num_neighbours == len(horizon.cooperators):
        eval_free_cells(
            free_cells, graph, horizon.cooperators, cooperator_only_policy(actions), rng
        )
    elif num_neighbours == len(horizon.defectors):
        eval_free_cells(free_cells, graph, horizon.defectors, defector_only_policy(actions), rng)
    else:
        eval_free_cells(
            free_cells, graph, horizon.cooperators, mixed_cooperator_policy(actions), rng
        )
        eval_free_cells(
            free_cells, graph, horizon.defectors, mixed_defector_policy(actions), rng
        )

    best_ids = best_free_cells(free_cells)
    if len(best_ids) == 1:
        return best_ids[0]
    return best_ids[rng.randint(0, len(best_ids) - 1)]


def update_position(
    graph: NodeGraph,
    empty: EmptyCells,
    agent_id: int,
    horizon: Horizon,
    rng: Random,
) -> int:
    """Move ``agent_id`` according to its genome; return the cell it now occupies."""
    target_id = choose_target(graph, agent_id, horizon, rng)
    return move_agent(graph, empty, agent_id, target_id)
