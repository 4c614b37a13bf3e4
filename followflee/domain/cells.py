"""Agent/empty-cell bookkeeping and node attribute helpers."""

from __future__ import annotations

from collections.abc import Iterator
from random import Random

from followflee.config.constants import ACTIONS_ATTR, EMPTY, NODE_ATTRS, SCORE_ATTR, STRATEGY_ATTR
from followflee.domain.graph import NodeGraph
from followflee.errors import ModelIntegrityError

CellAttrs = tuple[int, int, int]
"""(strategy, actions, score) of one node."""


class EmptyCells:
    """Set of empty node ids with O(1) insert, remove and positional choice.

    Backed by a list plus an id -> index map; removal swaps the last element
    into the vacated slot.
    """

    def __init__(self, node_ids: list[int] | None = None) -> None:
        self._ids: list[int] = []
        self._index: dict[int, int] = {}
        for node_id in node_ids or ():
            self.add(node_id)

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def __iter__(self) -> Iterator[int]:
        return iter(self._ids)

    def add(self, node_id: int) -> None:
        if node_id in self._index:
            raise ModelIntegrityError(f"cell {node_id} is already empty")
        self._index[node_id] = len(self._ids)
        self._ids.append(node_id)

    def remove(self, node_id: int) -> None:
        try:
            position = self._index.pop(node_id)
        except KeyError:
            raise ModelIntegrityError(f"cell {node_id} is not empty") from None
        last = self._ids.pop()
        if last != node_id:
            self._ids[position] = last
            self._index[last] = position

    def choice(self, rng: Random) -> int:
        """Pick an empty cell uniformly at random."""
        if not self._ids:
            raise ModelIntegrityError("no empty cell available")
        return self._ids[rng.randint(0, len(self._ids) - 1)]

    def clear(self) -> None:
        self._ids.clear()
        self._index.clear()


def read_attrs(graph: NodeGraph, node_id: int) -> CellAttrs:
    return (
        graph.get_attr(node_id, STRATEGY_ATTR),
        graph.get_attr(node_id, ACTIONS_ATTR),
        graph.get_attr(node_id, SCORE_ATTR),
    )


def write_attrs(graph: NodeGraph, node_id: int, attrs: CellAttrs) -> None:
    for name, value in zip(NODE_ATTRS, attrs, strict=True):
        graph.set_attr(node_id, name, value)


def copy_attrs(graph: NodeGraph, src: int, tgt: int) -> None:
    write_attrs(graph, tgt, read_attrs(graph, src))


def clear_attrs(graph: NodeGraph, node_id: int) -> None:
    write_attrs(graph, node_id, (EMPTY, 0, 0))


def partition_nodes(graph: NodeGraph) -> tuple[list[int], EmptyCells]:
    """Split every node into the agent list or the empty-cell set."""
    agents: list[int] = []
    empty = EmptyCells()
    for node_id in graph.node_ids():
        if graph.get_attr(node_id, STRATEGY_ATTR) > EMPTY:
            agents.append(node_id)
        else:
            empty.add(node_id)
    return agents, empty


def move_agent(graph: NodeGraph, empty: EmptyCells, agent_id: int, target_id: int) -> int:
    """Relocate the agent on ``agent_id`` to ``target_id`` and return its new cell."""
    if agent_id == target_id:
        return agent_id
    empty.remove(target_id)
    copy_attrs(graph, agent_id, target_id)
    clear_attrs(graph, agent_id)
    empty.add(agent_id)
    return target_id


def check_partition(graph: NodeGraph, agents: list[int], empty: EmptyCells) -> None:
    """Raise :exc:`ModelIntegrityError` unless agents and empty cells partition the graph."""
    agent_set = set(agents)
    if len(agent_set) != len(agents):
        raise ModelIntegrityError("an agent occupies more than one slot of the agent list")
    overlap = agent_set.intersection(empty)
    if overlap:
        raise ModelIntegrityError(f"cells {sorted(overlap)} are both agents and empty")
    node_ids = set(graph.node_ids())
    if agent_set | set(empty) != node_ids or len(agents) + len(empty) != len(node_ids):
        raise ModelIntegrityError("agents and empty cells do not cover the node set")
    for node_id in agents:
        if graph.get_attr(node_id, STRATEGY_ATTR) == EMPTY:
            raise ModelIntegrityError(f"agent cell {node_id} has no strategy")
    for node_id in empty:
        if graph.get_attr(node_id, STRATEGY_ATTR) != EMPTY:
            raise ModelIntegrityError(f"empty cell {node_id} holds a strategy")
