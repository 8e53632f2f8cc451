"""Blueprint exports."""

from . import habits, settings, stats

__all__ = [
    "habits",
    "settings",
    "stats",
]
