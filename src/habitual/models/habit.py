"""Habit tracking data structures."""

from __future__ import annotations

import datetime as dt
from typing import ClassVar, Optional

from sqlalchemy import JSON, Column, DateTime
from sqlalchemy.types import TypeDecorator
from sqlmodel import Field, SQLModel

from ..dates import utc_now

DEFAULT_COLOR = "#4F46E5"


class UTCDateTime(TypeDecorator):
    """Timezone-aware timestamp column that always loads as UTC.

    SQLite drops the offset on write, so naive values coming back are tagged
    with UTC again.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(dt.timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=dt.timezone.utc)
        return value


class Habit(SQLModel, table=True):
    """A user-defined habit scheduled on a set of weekdays (0 = Sunday)."""

    __tablename__: ClassVar[str] = "habit"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=120)
    description: Optional[str] = Field(default=None, max_length=500)
    color: Optional[str] = Field(default=DEFAULT_COLOR, max_length=32)
    frequency_days: list[int] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    reminder_time: Optional[str] = Field(default=None, max_length=5)
    created_at: dt.datetime = Field(
        default_factory=utc_now, sa_column=Column(UTCDateTime, nullable=False)
    )
    user_id: Optional[int] = Field(default=None, index=True)

    def is_scheduled_on(self, weekday: int) -> bool:
        """Return True when the Sunday-based ``weekday`` is in the schedule."""

        return weekday in set(self.frequency_days or ())


class HabitCompletion(SQLModel, table=True):
    """Completion mark for a habit on one calendar day."""

    __tablename__: ClassVar[str] = "habit_completion"

    id: Optional[int] = Field(default=None, primary_key=True)
    habit_id: int = Field(foreign_key="habit.id", nullable=False, index=True)
    date: dt.date = Field(nullable=False, index=True)
    completed: bool = Field(default=True, nullable=False)
    user_id: Optional[int] = Field(default=None, index=True)
