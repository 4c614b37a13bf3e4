"""Tests for followflee.experiments.host module."""

from __future__ import annotations

from random import Random

import pytest

from followflee.config.constants import (
    ACTIONS_ATTR,
    COOPERATOR,
    DEFECTOR,
    EMPTY,
    SCORE_ATTR,
    STRATEGY_ATTR,
)
from followflee.config.types import PopulationConfig, Topology
from followflee.domain.graph import NetworkxNodeGraph
from followflee.experiments.host import build_graph, populate


class TestBuildGraph:
    def test_ring(self) -> None:
        graph = NetworkxNodeGraph(build_graph(Topology.RING, 7, 4, Random(0)))
        assert graph.degree == 2
        assert len(graph) == 7

    def test_torus(self) -> None:
        g = build_graph(Topology.TORUS, 4, 0, Random(0))
        assert g.graph["neighbours"] == 4
        graph = NetworkxNodeGraph(g)
        assert list(graph.node_ids()) == list(range(16))
        assert graph.degree == 4

    def test_random_regular(self) -> None:
        g = build_graph(Topology.RANDOM_REGULAR, 12, 3, Random(5))
        assert all(d == 3 for _, d in g.degree())
        assert NetworkxNodeGraph(g).degree == 3

    def test_random_regular_is_seeded(self) -> None:
        a = build_graph(Topology.RANDOM_REGULAR, 12, 3, Random(5))
        b = build_graph(Topology.RANDOM_REGULAR, 12, 3, Random(5))
        assert sorted(a.edges()) == sorted(b.edges())


class TestPopulate:
    def test_counts(self) -> None:
        graph = NetworkxNodeGraph(build_graph(Topology.TORUS, 10, 4, Random(0)))
        populate(graph, PopulationConfig(density=0.3, cooperator_fraction=0.5), Random(1))

        strategies = [graph.get_attr(n, STRATEGY_ATTR) for n in graph.node_ids()]
        assert strategies.count(COOPERATOR) == 15
        assert strategies.count(DEFECTOR) == 15
        assert strategies.count(EMPTY) == 70
        assert all(graph.get_attr(n, SCORE_ATTR) == 0 for n in graph.node_ids())

    def test_empty_cells_are_zeroed(self) -> None:
        graph = NetworkxNodeGraph(build_graph(Topology.RING, 20, 2, Random(0)))
        for node_id in graph.node_ids():
            graph.set_attr(node_id, ACTIONS_ATTR, 99)
            graph.set_attr(node_id, SCORE_ATTR, 5)
        populate(graph, PopulationConfig(density=0.25), Random(2))
        for node_id in graph.node_ids():
            if graph.get_attr(node_id, STRATEGY_ATTR) == EMPTY:
                assert graph.get_attr(node_id, ACTIONS_ATTR) == 0
            assert graph.get_attr(node_id, SCORE_ATTR) == 0

    @pytest.mark.parametrize("density", [0.0, 1.0])
    def test_density_extremes(self, density: float) -> None:
        graph = NetworkxNodeGraph(build_graph(Topology.RING, 9, 2, Random(0)))
        populate(graph, PopulationConfig(density=density), Random(3))
        n_agents = sum(graph.get_attr(n, STRATEGY_ATTR) != EMPTY for n in graph.node_ids())
        assert n_agents == round(density * 9)

    def test_seeded(self) -> None:
        a = NetworkxNodeGraph(build_graph(Topology.TORUS, 5, 4, Random(0)))
        b = NetworkxNodeGraph(build_graph(Topology.TORUS, 5, 4, Random(0)))
        populate(a, PopulationConfig(), Random(8))
        populate(b, PopulationConfig(), Random(8))
        assert a.snapshot() == b.snapshot()
