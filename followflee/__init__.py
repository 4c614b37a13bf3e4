"""Evolutionary spatial prisoner's dilemma with genome-driven follow/flee movement."""

__version__ = "0.1.0"
