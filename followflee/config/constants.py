"""Centralized domain constants for the follow/flee game.

All magic numbers that appear across multiple modules are defined here.
Consuming modules should import from this module rather than defining
their own inline literals.
"""

from __future__ import annotations

EMPTY = 0
"""Strategy value of a node with no agent on it."""

COOPERATOR = 1
"""Strategy value of a cooperating agent."""

DEFECTOR = 2
"""Strategy value of a defecting agent."""

STRATEGIES: tuple[int, ...] = (EMPTY, COOPERATOR, DEFECTOR)
"""Every valid value of the ``strategy`` node attribute."""

REWARD = 3
"""CC payoff: reward for mutual cooperation."""

SUCKER = 0
"""CD payoff: sucker's payoff for cooperating against a defector."""

TEMPTATION = 5
"""DC payoff: temptation to defect against a cooperator."""

PUNISHMENT = 1
"""DD payoff: punishment for mutual defection."""

GENOME_BITS = 8
"""Width of the ``actions`` genome."""

MAX_GENOME = (1 << GENOME_BITS) - 1
"""Largest valid ``actions`` value (255)."""

STRATEGY_ATTR = "strategy"
ACTIONS_ATTR = "actions"
SCORE_ATTR = "score"

NODE_ATTRS: tuple[str, ...] = (STRATEGY_ATTR, ACTIONS_ATTR, SCORE_ATTR)
"""Node attributes read and written by the model, in copy order."""

NEIGHBOURS_GRAPH_ATTR = "neighbours"
"""Graph-level attribute holding the common neighbourhood size."""

REP_MODE_KEY = "repMode"
REP_RATE_KEY = "repRate"
STEPS_PER_GEN_KEY = "stepsPerGen"

NUM_GENERATIONS = 100
"""Default number of generations run by the driver."""

FLUSH_THRESHOLD = 1_024
"""Flush generation log rows to Parquet once this in-memory row count is reached."""
