"""Prisoner's dilemma payoff table."""

from __future__ import annotations

from followflee.config.constants import (
    COOPERATOR,
    DEFECTOR,
    PUNISHMENT,
    REWARD,
    SUCKER,
    TEMPTATION,
)
from followflee.errors import ModelIntegrityError

# (own strategy, opponent strategy) -> own payoff
PAYOFF_TABLE: dict[tuple[int, int], int] = {
    (COOPERATOR, COOPERATOR): REWARD,
    (COOPERATOR, DEFECTOR): SUCKER,
    (DEFECTOR, COOPERATOR): TEMPTATION,
    (DEFECTOR, DEFECTOR): PUNISHMENT,
}


def payoff(strategy_a: int, strategy_b: int) -> int:
    """Return the payoff received by ``strategy_a`` when playing ``strategy_b``.

    Raises :exc:`ModelIntegrityError` if either side is not a cooperator or
    defector; an empty cell reaching the game means the population is corrupt.
    """
    try:
        return PAYOFF_TABLE[(strategy_a, strategy_b)]
    except KeyError:
        raise ModelIntegrityError(
            f"invalid strategies ({strategy_a}, {strategy_b})"
        ) from None
