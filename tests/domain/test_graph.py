"""Tests for followflee.domain.graph module."""

from __future__ import annotations

import networkx as nx
import pytest

from followflee.config.constants import ACTIONS_ATTR, SCORE_ATTR, STRATEGY_ATTR
from followflee.domain.graph import NetworkxNodeGraph


class TestNetworkxNodeGraph:
    def test_ring_degree_and_neighbours(self) -> None:
        graph = NetworkxNodeGraph(nx.cycle_graph(4))
        assert graph.degree == 2
        assert sorted(graph.neighbours(0)) == [1, 3]
        assert list(graph.node_ids()) == [0, 1, 2, 3]
        assert len(graph) == 4

    def test_directed_graph_uses_out_edges(self) -> None:
        graph = NetworkxNodeGraph(nx.DiGraph([(0, 1), (1, 2), (2, 0)]))
        assert graph.degree == 1
        assert graph.neighbours(0) == (1,)

    def test_irregular_graph_rejected(self) -> None:
        with pytest.raises(ValueError, match="not regular"):
            NetworkxNodeGraph(nx.path_graph(3))

    def test_declared_degree_must_match(self) -> None:
        g = nx.cycle_graph(5)
        g.graph["neighbours"] = 4
        with pytest.raises(ValueError, match="does not match"):
            NetworkxNodeGraph(g)

    def test_declared_degree_accepted(self) -> None:
        g = nx.cycle_graph(5)
        g.graph["neighbours"] = 2
        assert NetworkxNodeGraph(g).degree == 2

    def test_non_integer_labels_rejected(self) -> None:
        with pytest.raises(ValueError, match="integers"):
            NetworkxNodeGraph(nx.grid_2d_graph(3, 3, periodic=True))


class TestNodeAttributes:
    def test_missing_attrs_read_as_empty(self) -> None:
        graph = NetworkxNodeGraph(nx.cycle_graph(3))
        assert graph.get_attr(0, STRATEGY_ATTR) == 0
        assert graph.get_attr(0, ACTIONS_ATTR) == 0
        assert graph.get_attr(0, SCORE_ATTR) == 0

    def test_set_and_get(self) -> None:
        graph = NetworkxNodeGraph(nx.cycle_graph(3))
        graph.set_attr(1, STRATEGY_ATTR, 2)
        graph.set_attr(1, ACTIONS_ATTR, 200)
        graph.set_attr(1, SCORE_ATTR, -7)
        assert graph.snapshot()[1] == (2, 200, -7)
        assert graph.graph.nodes[1][STRATEGY_ATTR] == 2

    def test_invalid_strategy_rejected(self) -> None:
        graph = NetworkxNodeGraph(nx.cycle_graph(3))
        with pytest.raises(ValueError, match="strategy"):
            graph.set_attr(0, STRATEGY_ATTR, 3)

    def test_invalid_actions_rejected(self) -> None:
        graph = NetworkxNodeGraph(nx.cycle_graph(3))
        with pytest.raises(ValueError, match="actions"):
            graph.set_attr(0, ACTIONS_ATTR, 256)

    def test_unknown_attribute(self) -> None:
        graph = NetworkxNodeGraph(nx.cycle_graph(3))
        with pytest.raises(KeyError):
            graph.set_attr(0, "energy", 1)
        with pytest.raises(KeyError):
            graph.get_attr(0, "energy")
