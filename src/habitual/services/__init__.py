"""Service module exports."""

from . import seed, statistics

__all__ = ["seed", "statistics"]
