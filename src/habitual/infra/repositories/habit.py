"""SQLModel implementation of the habit store."""

from __future__ import annotations

from datetime import date
from typing import Any, Callable, Mapping, Optional

from sqlmodel import Session, SQLModel, select

from ...dates import DateLike, normalize_date, utc_now, utc_today
from ...logging_config import get_logger
from ...models.habit import DEFAULT_COLOR, Habit, HabitCompletion
from ...services.statistics import HabitWithCompletions, build_habits_with_completions
from .memory import HABIT_FIELDS

logger = get_logger(__name__)


class SQLModelHabitStore:
    """SQLModel-based habit store; any SQLAlchemy URL works, SQLite by default."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def create_habit(self, data: Mapping[str, Any]) -> Habit:
        """Create a new habit."""
        with self.session_factory() as session:
            habit = Habit(
                name=data["name"],
                description=data.get("description"),
                color=data.get("color") or DEFAULT_COLOR,
                frequency_days=list(data.get("frequency_days") or []),
                reminder_time=data.get("reminder_time"),
                created_at=utc_now(),
                user_id=data.get("user_id"),
            )
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            logger.info("Created habit", extra={"habit_id": habit.id})
            return habit

    def get_habit(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        with self.session_factory() as session:
            obj = session.get(Habit, habit_id)
            if obj:
                session.expunge(obj)
            return obj

    def update_habit(self, habit_id: int, data: Mapping[str, Any]) -> Optional[Habit]:
        """Merge provided fields onto an existing habit."""
        with self.session_factory() as session:
            habit = session.get(Habit, habit_id)
            if habit is None:
                logger.info("Update skipped; habit missing", extra={"habit_id": habit_id})
                return None

            for name in HABIT_FIELDS:
                if data.get(name) is None:
                    continue
                value = data[name]
                setattr(habit, name, list(value) if name == "frequency_days" else value)
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            logger.info("Updated habit", extra={"habit_id": habit_id})
            return habit

    def delete_habit(self, habit_id: int) -> bool:
        """Delete a habit and every completion recorded for it."""
        with self.session_factory() as session:
            habit = session.get(Habit, habit_id)
            if habit is None:
                return False

            stale = session.exec(
                select(HabitCompletion).where(HabitCompletion.habit_id == habit_id)
            ).all()
            for completion in stale:
                session.delete(completion)
            session.flush()
            session.delete(habit)
            session.commit()
            logger.info(
                "Deleted habit", extra={"habit_id": habit_id, "completions_removed": len(stale)}
            )
            return True

    def list_habits(self) -> list[Habit]:
        with self.session_factory() as session:
            rows = list(session.exec(select(Habit).order_by(Habit.id)).all())  # type: ignore[arg-type]
            session.expunge_all()
            return rows

    def get_all_habits(self, *, today: date | None = None) -> list[HabitWithCompletions]:
        return build_habits_with_completions(
            self.list_habits(), self.list_completions(), today=today or utc_today()
        )

    def list_completions(self) -> list[HabitCompletion]:
        with self.session_factory() as session:
            statement = select(HabitCompletion).order_by(HabitCompletion.id)  # type: ignore[arg-type]
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def get_completion_by_habit_and_date(
        self, habit_id: int, day: DateLike
    ) -> Optional[HabitCompletion]:
        """Return the first completion recorded for the habit on that day."""
        with self.session_factory() as session:
            obj = session.exec(self._completion_query(habit_id, normalize_date(day))).first()
            if obj:
                session.expunge(obj)
            return obj

    def upsert_completion(
        self, habit_id: int, day: DateLike, completed: bool = True
    ) -> tuple[HabitCompletion, bool]:
        """Insert or update the completion for (habit, day)."""
        target = normalize_date(day)
        with self.session_factory() as session:
            existing = session.exec(self._completion_query(habit_id, target)).first()
            if existing is not None:
                existing.completed = completed
                session.add(existing)
                session.commit()
                session.refresh(existing)
                session.expunge(existing)
                return existing, False

            habit = session.get(Habit, habit_id)
            completion = HabitCompletion(
                habit_id=habit_id,
                date=target,
                completed=completed,
                user_id=habit.user_id if habit is not None else None,
            )
            session.add(completion)
            session.commit()
            session.refresh(completion)
            session.expunge(completion)
            return completion, True

    def reset_all_data(self) -> None:
        """Drop and recreate both tables so ids restart at 1."""
        tables = [HabitCompletion.__table__, Habit.__table__]
        with self.session_factory() as session:
            bind = session.get_bind()
        SQLModel.metadata.drop_all(bind, tables=tables)
        SQLModel.metadata.create_all(bind, tables=tables)
        logger.warning("All habit data reset")

    @staticmethod
    def _completion_query(habit_id: int, day: date):
        return (
            select(HabitCompletion)
            .where(HabitCompletion.habit_id == habit_id)
            .where(HabitCompletion.date == day)
            .order_by(HabitCompletion.id)  # type: ignore[arg-type]
        )
