"""Typed failure raised when the model reaches an impossible state."""

from __future__ import annotations


class ModelIntegrityError(RuntimeError):
    """Unrecoverable internal corruption of the population or its configuration.

    Raised instead of silently continuing, since any further generation would
    break the agent/empty-cell partition. Hosts should stop the run.
    """
