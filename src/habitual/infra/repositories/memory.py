"""In-memory implementation of the habit store."""

from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional

from ...dates import DateLike, normalize_date, utc_now, utc_today
from ...logging_config import get_logger
from ...models.habit import DEFAULT_COLOR, Habit, HabitCompletion
from ...services.statistics import HabitWithCompletions, build_habits_with_completions

logger = get_logger(__name__)

HABIT_FIELDS = ("name", "description", "color", "frequency_days", "reminder_time", "user_id")


class InMemoryHabitStore:
    """Volatile habit store keyed by integer ids.

    State lives for the lifetime of the instance; nothing is persisted.
    """

    def __init__(self) -> None:
        self._habits: dict[int, Habit] = {}
        self._completions: dict[int, HabitCompletion] = {}
        self._habit_counter = 1
        self._completion_counter = 1

    def create_habit(self, data: Mapping[str, Any]) -> Habit:
        """Create a new habit."""
        habit_id = self._habit_counter
        self._habit_counter += 1

        habit = Habit(
            id=habit_id,
            name=data["name"],
            description=data.get("description"),
            color=data.get("color") or DEFAULT_COLOR,
            frequency_days=list(data.get("frequency_days") or []),
            reminder_time=data.get("reminder_time"),
            created_at=utc_now(),
            user_id=data.get("user_id"),
        )
        self._habits[habit_id] = habit
        logger.info("Created habit", extra={"habit_id": habit_id})
        return habit

    def get_habit(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        return self._habits.get(habit_id)

    def update_habit(self, habit_id: int, data: Mapping[str, Any]) -> Optional[Habit]:
        """Merge provided fields onto an existing habit."""
        habit = self._habits.get(habit_id)
        if habit is None:
            logger.info("Update skipped; habit missing", extra={"habit_id": habit_id})
            return None

        for name in HABIT_FIELDS:
            if data.get(name) is None:
                continue
            value = data[name]
            setattr(habit, name, list(value) if name == "frequency_days" else value)
        logger.info("Updated habit", extra={"habit_id": habit_id})
        return habit

    def delete_habit(self, habit_id: int) -> bool:
        """Delete a habit and every completion recorded for it."""
        if self._habits.pop(habit_id, None) is None:
            return False

        stale = [cid for cid, c in self._completions.items() if c.habit_id == habit_id]
        for completion_id in stale:
            del self._completions[completion_id]
        logger.info(
            "Deleted habit", extra={"habit_id": habit_id, "completions_removed": len(stale)}
        )
        return True

    def list_habits(self) -> list[Habit]:
        return list(self._habits.values())

    def get_all_habits(self, *, today: date | None = None) -> list[HabitWithCompletions]:
        return build_habits_with_completions(
            self.list_habits(), self.list_completions(), today=today or utc_today()
        )

    def list_completions(self) -> list[HabitCompletion]:
        return list(self._completions.values())

    def get_completion_by_habit_and_date(
        self, habit_id: int, day: DateLike
    ) -> Optional[HabitCompletion]:
        """Return the first completion recorded for the habit on that day."""
        target = normalize_date(day)
        for completion in self._completions.values():
            if completion.habit_id == habit_id and completion.date == target:
                return completion
        return None

    def upsert_completion(
        self, habit_id: int, day: DateLike, completed: bool = True
    ) -> tuple[HabitCompletion, bool]:
        """Insert or update the completion for (habit, day)."""
        existing = self.get_completion_by_habit_and_date(habit_id, day)
        if existing is not None:
            existing.completed = completed
            return existing, False

        completion_id = self._completion_counter
        self._completion_counter += 1
        habit = self._habits.get(habit_id)
        completion = HabitCompletion(
            id=completion_id,
            habit_id=habit_id,
            date=normalize_date(day),
            completed=completed,
            user_id=habit.user_id if habit is not None else None,
        )
        self._completions[completion_id] = completion
        return completion, True

    def reset_all_data(self) -> None:
        """Drop every record and restart id counters."""
        self._habits.clear()
        self._completions.clear()
        self._habit_counter = 1
        self._completion_counter = 1
        logger.warning("All habit data reset")
