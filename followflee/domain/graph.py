"""Host graph contract and its NetworkX-backed implementation.

The model only relies on a regular graph: every node has the same number of
out-neighbours and that set never changes during a run. Node attributes
(``strategy``, ``actions``, ``score``) are the only mutable state.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Protocol

import networkx as nx

from followflee.config.constants import (
    ACTIONS_ATTR,
    MAX_GENOME,
    NEIGHBOURS_GRAPH_ATTR,
    NODE_ATTRS,
    SCORE_ATTR,
    STRATEGIES,
    STRATEGY_ATTR,
)


class NodeGraph(Protocol):
    """Graph collaborator consumed by the model."""

    @property
    def degree(self) -> int:
        """Common neighbourhood size of every node."""
        ...

    def node_ids(self) -> Iterator[int]: ...

    def neighbours(self, node_id: int) -> Sequence[int]: ...

    def get_attr(self, node_id: int, name: str) -> int: ...

    def set_attr(self, node_id: int, name: str, value: int) -> None: ...


class NetworkxNodeGraph:
    """NodeGraph over a NetworkX graph with integer node labels.

    Undirected graphs expose ``neighbors``; directed graphs expose
    ``successors`` (out-edges). Neighbour tuples are cached once since the
    topology is fixed for the lifetime of a run. Missing node attributes read
    as 0, i.e. an empty cell.
    """

    def __init__(self, graph: nx.Graph) -> None:
        self.graph = graph
        self._neighbours: dict[int, tuple[int, ...]] = {}
        adjacency = graph.successors if graph.is_directed() else graph.neighbors
        for node_id in sorted(graph.nodes()):
            if isinstance(node_id, bool) or not isinstance(node_id, int):
                raise ValueError(f"node labels must be integers, got {node_id!r}")
            self._neighbours[node_id] = tuple(adjacency(node_id))
        self._degree = self._resolve_degree()

    def _resolve_degree(self) -> int:
        degrees = {len(nbrs) for nbrs in self._neighbours.values()}
        if len(degrees) > 1:
            raise ValueError(f"graph is not regular: found degrees {sorted(degrees)}")
        observed = degrees.pop() if degrees else 0
        declared = self.graph.graph.get(NEIGHBOURS_GRAPH_ATTR)
        if declared is not None and int(declared) != observed:
            raise ValueError(
                f"graph attribute {NEIGHBOURS_GRAPH_ATTR}={declared} "
                f"does not match node degree {observed}"
            )
        return observed

    @property
    def degree(self) -> int:
        return self._degree

    def node_ids(self) -> Iterator[int]:
        return iter(self._neighbours)

    def neighbours(self, node_id: int) -> tuple[int, ...]:
        return self._neighbours[node_id]

    def __len__(self) -> int:
        return len(self._neighbours)

    def get_attr(self, node_id: int, name: str) -> int:
        if name not in NODE_ATTRS:
            raise KeyError(f"unknown node attribute {name!r}")
        return int(self.graph.nodes[node_id].get(name, 0))

    def set_attr(self, node_id: int, name: str, value: int) -> None:
        if name == STRATEGY_ATTR and value not in STRATEGIES:
            raise ValueError(f"strategy must be one of {STRATEGIES}, got {value!r}")
        if name == ACTIONS_ATTR and not 0 <= value <= MAX_GENOME:
            raise ValueError(f"actions must be in [0, {MAX_GENOME}], got {value!r}")
        if name not in NODE_ATTRS:
            raise KeyError(f"unknown node attribute {name!r}")
        self.graph.nodes[node_id][name] = int(value)

    def snapshot(self) -> dict[int, tuple[int, int, int]]:
        """Return ``node_id -> (strategy, actions, score)`` for every node."""
        return {
            node_id: (
                self.get_attr(node_id, STRATEGY_ATTR),
                self.get_attr(node_id, ACTIONS_ATTR),
                self.get_attr(node_id, SCORE_ATTR),
            )
            for node_id in self._neighbours
        }
