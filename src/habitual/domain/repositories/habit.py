"""Habit store protocol."""

from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Protocol

from ...dates import DateLike
from ...models.habit import Habit, HabitCompletion
from ...services.statistics import HabitWithCompletions


class HabitStore(Protocol):
    """Owner of the habit and completion collections.

    ``data`` mappings use the model's snake_case field names. Dates may be
    passed as ``date``, ``datetime`` or ISO strings and are normalized to a
    calendar day before comparison or storage.
    """

    def create_habit(self, data: Mapping[str, Any]) -> Habit:
        """Create a habit with the next id and ``created_at`` set to now."""
        ...

    def get_habit(self, habit_id: int) -> Optional[Habit]:
        """Return a habit by id."""
        ...

    def update_habit(self, habit_id: int, data: Mapping[str, Any]) -> Optional[Habit]:
        """Merge ``data`` onto an existing habit; ``None`` when it is missing."""
        ...

    def delete_habit(self, habit_id: int) -> bool:
        """Delete a habit and its completions; return whether it existed."""
        ...

    def list_habits(self) -> list[Habit]:
        """Return every habit ordered by id."""
        ...

    def get_all_habits(self, *, today: date | None = None) -> list[HabitWithCompletions]:
        """Return every habit joined with its completions and 7-day rate."""
        ...

    def list_completions(self) -> list[HabitCompletion]:
        """Return every completion ordered by id."""
        ...

    def get_completion_by_habit_and_date(
        self, habit_id: int, day: DateLike
    ) -> Optional[HabitCompletion]:
        """Return the first completion for ``habit_id`` on ``day``."""
        ...

    def upsert_completion(
        self, habit_id: int, day: DateLike, completed: bool = True
    ) -> tuple[HabitCompletion, bool]:
        """Set the completion flag for a day; return ``(record, created)``."""
        ...

    def reset_all_data(self) -> None:
        """Remove every habit and completion and restart ids at 1."""
        ...
