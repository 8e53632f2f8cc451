"""Concrete habit store implementations."""

from .habit import SQLModelHabitStore
from .memory import InMemoryHabitStore

__all__ = [
    "InMemoryHabitStore",
    "SQLModelHabitStore",
]
