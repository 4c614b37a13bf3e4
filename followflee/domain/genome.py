"""8-bit movement genome: four 2-bit sub-policy selectors.

Bit layout (bit 7 is the most significant)::

    [7:6] cooperator-only neighbourhood
    [5:4] defector-only neighbourhood
    [3:2] mixed neighbourhood, reaction to cooperators
    [1:0] mixed neighbourhood, reaction to defectors
"""

from __future__ import annotations

from enum import IntEnum

from followflee.config.constants import MAX_GENOME
from followflee.errors import ModelIntegrityError

COOPERATOR_ONLY_SHIFT = 6
DEFECTOR_ONLY_SHIFT = 4
MIXED_COOPERATOR_SHIFT = 2
MIXED_DEFECTOR_SHIFT = 0

_POLICY_MASK = 0b11


class MovePolicy(IntEnum):
    """How an agent weighs free cells against one class of neighbours."""

    STAY = 0
    FOLLOW = 1
    FLEE = 2
    RANDOM = 3


def decode_policy(code: int) -> MovePolicy:
    """Map a 2-bit selector to its sub-policy."""
    try:
        return MovePolicy(code)
    except ValueError:
        raise ModelIntegrityError(f"invalid action ({code})") from None


def _field(actions: int, shift: int) -> MovePolicy:
    if not 0 <= actions <= MAX_GENOME:
        raise ModelIntegrityError(f"genome {actions!r} is not an 8-bit unsigned value")
    return decode_policy((actions >> shift) & _POLICY_MASK)


def cooperator_only_policy(actions: int) -> MovePolicy:
    return _field(actions, COOPERATOR_ONLY_SHIFT)


def defector_only_policy(actions: int) -> MovePolicy:
    return _field(actions, DEFECTOR_ONLY_SHIFT)


def mixed_cooperator_policy(actions: int) -> MovePolicy:
    return _field(actions, MIXED_COOPERATOR_SHIFT)


def mixed_defector_policy(actions: int) -> MovePolicy:
    return _field(actions, MIXED_DEFECTOR_SHIFT)


def encode_genome(
    cooperator_only: MovePolicy,
    defector_only: MovePolicy,
    mixed_cooperator: MovePolicy,
    mixed_defector: MovePolicy,
) -> int:
    """Pack four sub-policies into an ``actions`` value."""
    return (
        (int(cooperator_only) << COOPERATOR_ONLY_SHIFT)
        | (int(defector_only) << DEFECTOR_ONLY_SHIFT)
        | (int(mixed_cooperator) << MIXED_COOPERATOR_SHIFT)
        | (int(mixed_defector) << MIXED_DEFECTOR_SHIFT)
    )
