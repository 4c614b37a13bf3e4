"""Neighbourhood scan: scoring plus the cooperator/defector/free-cell split."""

from __future__ import annotations

from dataclasses import dataclass, field

from followflee.config.constants import COOPERATOR, EMPTY, SCORE_ATTR, STRATEGY_ATTR
from followflee.domain.graph import NodeGraph
from followflee.domain.payoff import payoff


@dataclass
class FreeCell:
    """A candidate destination and its running movement score."""

    node_id: int
    score: int = 0


@dataclass
class Horizon:
    """Neighbourhood state of one agent for one sub-step.

    ``free_cells[0]`` is always the agent's own cell. A single instance is
    reused across agents and sub-steps via :meth:`clear`.
    """

    cooperators: list[int] = field(default_factory=list)
    defectors: list[int] = field(default_factory=list)
    free_cells: list[FreeCell] = field(default_factory=list)

    def clear(self) -> None:
        self.cooperators.clear()
        self.defectors.clear()
        self.free_cells.clear()


def scan_horizon(graph: NodeGraph, agent_id: int, horizon: Horizon) -> None:
    """Refill ``horizon`` for ``agent_id`` and add this sub-step's payoffs to its score."""
    horizon.clear()
    # staying put is always an option
    horizon.free_cells.append(FreeCell(agent_id))

    strategy = graph.get_attr(agent_id, STRATEGY_ATTR)
    score = graph.get_attr(agent_id, SCORE_ATTR)
    for neighbour_id in graph.neighbours(agent_id):
        neighbour_strategy = graph.get_attr(neighbour_id, STRATEGY_ATTR)
        if neighbour_strategy == EMPTY:
            horizon.free_cells.append(FreeCell(neighbour_id))
            continue

        score += payoff(strategy, neighbour_strategy)
        if neighbour_strategy == COOPERATOR:
            horizon.cooperators.append(neighbour_id)
        else:
            horizon.defectors.append(neighbour_id)

    graph.set_attr(agent_id, SCORE_ATTR, score)
