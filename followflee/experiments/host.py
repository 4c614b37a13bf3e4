"""Host-side glue: regular NetworkX graphs and initial population seeding."""

from __future__ import annotations

from random import Random

import networkx as nx

from followflee.config.constants import (
    ACTIONS_ATTR,
    COOPERATOR,
    DEFECTOR,
    EMPTY,
    MAX_GENOME,
    NEIGHBOURS_GRAPH_ATTR,
    SCORE_ATTR,
    STRATEGY_ATTR,
)
from followflee.config.types import PopulationConfig, Topology
from followflee.domain.graph import NetworkxNodeGraph


def build_graph(topology: Topology, size: int, degree: int, rng: Random) -> nx.Graph:
    """Build a regular graph with integer node labels.

    ``ring`` has degree 2, ``torus`` (``size`` x ``size``, periodic von
    Neumann) has degree 4; ``random_regular`` uses ``degree``.
    """
    if topology == Topology.RING:
        graph = nx.cycle_graph(size)
    elif topology == Topology.TORUS:
        lattice = nx.grid_2d_graph(size, size, periodic=True)
        graph = nx.convert_node_labels_to_integers(lattice, ordering="sorted")
    elif topology == Topology.RANDOM_REGULAR:
        graph = nx.random_regular_graph(degree, size, seed=rng)
    else:
        raise ValueError(f"unsupported topology: {topology!r}")
    degrees = {d for _, d in graph.degree()}
    graph.graph[NEIGHBOURS_GRAPH_ATTR] = degrees.pop() if degrees else 0
    return graph


def populate(graph: NetworkxNodeGraph, population: PopulationConfig, rng: Random) -> None:
    """Place agents with random strategies and genomes; clear every other node."""
    node_ids = sorted(graph.node_ids())
    n_agents = round(population.density * len(node_ids))
    occupied = set(rng.sample(node_ids, n_agents))
    n_cooperators = round(population.cooperator_fraction * n_agents)
    strategies = [COOPERATOR] * n_cooperators + [DEFECTOR] * (n_agents - n_cooperators)
    rng.shuffle(strategies)

    remaining = iter(strategies)
    for node_id in node_ids:
        if node_id in occupied:
            graph.set_attr(node_id, STRATEGY_ATTR, next(remaining))
            graph.set_attr(node_id, ACTIONS_ATTR, rng.randint(0, MAX_GENOME))
        else:
            graph.set_attr(node_id, STRATEGY_ATTR, EMPTY)
            graph.set_attr(node_id, ACTIONS_ATTR, 0)
        graph.set_attr(node_id, SCORE_ATTR, 0)
