"""Per-generation follow/flee model driven by an external scheduler.

Lifecycle: :meth:`FollowFleeModel.init` once with the raw model attributes,
:meth:`FollowFleeModel.before_loop` once to split nodes into agents and empty
cells, then :meth:`FollowFleeModel.algorithm_step` once per generation.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from random import Random

from followflee.config.constants import SCORE_ATTR
from followflee.config.types import ModelConfig
from followflee.domain.cells import EmptyCells, check_partition, partition_nodes
from followflee.domain.graph import NodeGraph
from followflee.domain.horizon import Horizon, scan_horizon
from followflee.domain.movement import update_position
from followflee.domain.replacement import ReplacementFn, replacement_strategy

logger = logging.getLogger(__name__)


class FollowFleeModel:
    """Prisoner's dilemma agents that move by genome and reproduce by score."""

    def __init__(self, graph: NodeGraph, rng: Random) -> None:
        self.graph = graph
        self.rng = rng
        self.config: ModelConfig | None = None
        self.agents: list[int] = []
        self.empty = EmptyCells()
        self.generation = 0
        self._replace: ReplacementFn | None = None
        # regular graph: one horizon serves every agent and sub-step
        self._horizon = Horizon()

    @classmethod
    def from_config(cls, graph: NodeGraph, config: ModelConfig, rng: Random) -> FollowFleeModel:
        """Build, initialise and partition a model in one call."""
        model = cls(graph, rng)
        if not model.init(config.to_attrs()):
            raise ValueError(f"invalid model config: {config}")
        model.before_loop()
        return model

    def init(self, attrs: Mapping[str, object]) -> bool:
        """Resolve the model attributes; return False on a recoverable config failure.

        An unknown ``repMode`` raises :exc:`ModelIntegrityError` instead.
        """
        try:
            config = ModelConfig.from_attrs(attrs)
        except ValueError as exc:
            logger.warning("Model initialization failed: %s", exc)
            return False
        self.config = config
        self._replace = replacement_strategy(config.rep_mode)
        return True

    def before_loop(self) -> None:
        """Split the graph's nodes into the agent list and the empty-cell set."""
        self.agents, self.empty = partition_nodes(self.graph)
        logger.debug(
            "Partitioned %d agents and %d empty cells", len(self.agents), len(self.empty)
        )

    def algorithm_step(self) -> bool:
        """Run one generation. Always returns True; stopping is the scheduler's call."""
        if self.config is None or self._replace is None:
            raise RuntimeError("init() must succeed before algorithm_step()")
        if not self.agents:
            return True

        # a fixed baseline order makes the shuffle the only source of ordering
        # randomness, so stepping and continuous runs stay identical
        self.agents.sort()
        self.rng.shuffle(self.agents)

        for index, agent_id in enumerate(self.agents):
            self.graph.set_attr(agent_id, SCORE_ATTR, 0)
            for _ in range(self.config.steps_per_gen):
                scan_horizon(self.graph, agent_id, self._horizon)
                agent_id = update_position(
                    self.graph, self.empty, agent_id, self._horizon, self.rng
                )
            self.agents[index] = agent_id

        agents_to_replace = self.agents_to_replace()
        if agents_to_replace > 0:
            self.agents = self._replace(
                self.graph, self.agents, self.empty, agents_to_replace, self.rng
            )

        self.generation += 1
        logger.debug(
            "Generation %d done: %d agents, %d replaced",
            self.generation,
            len(self.agents),
            agents_to_replace,
        )
        return True

    def agents_to_replace(self) -> int:
        if self.config is None:
            return 0
        return int(math.floor(len(self.agents) * self.config.rep_rate))

    def check_partition(self) -> None:
        """Raise :exc:`ModelIntegrityError` if agents and empty cells are out of sync."""
        check_partition(self.graph, self.agents, self.empty)
