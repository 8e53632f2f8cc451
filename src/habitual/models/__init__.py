"""SQLModel table exports."""

from .habit import DEFAULT_COLOR, Habit, HabitCompletion

__all__ = [
    "DEFAULT_COLOR",
    "Habit",
    "HabitCompletion",
]
