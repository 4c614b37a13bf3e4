"""Domain layer: payoff, genome, neighbourhood scan, movement and replacement."""

from followflee.domain.cells import EmptyCells, move_agent, partition_nodes
from followflee.domain.genome import MovePolicy, encode_genome
from followflee.domain.graph import NetworkxNodeGraph, NodeGraph
from followflee.domain.horizon import FreeCell, Horizon, scan_horizon
from followflee.domain.movement import choose_target, update_position
from followflee.domain.payoff import payoff
from followflee.domain.replacement import neighbour_bd, replacement_strategy, simple_bd

__all__ = [
    "EmptyCells",
    "FreeCell",
    "Horizon",
    "MovePolicy",
    "NetworkxNodeGraph",
    "NodeGraph",
    "choose_target",
    "encode_genome",
    "move_agent",
    "neighbour_bd",
    "partition_nodes",
    "payoff",
    "replacement_strategy",
    "scan_horizon",
    "simple_bd",
    "update_position",
]
