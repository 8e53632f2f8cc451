"""Habit and completion payload schemas."""

from __future__ import annotations

import datetime as dt
import re
from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from ...dates import normalize_date
from ...errors import ValidationFailed

REMINDER_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")

Weekday = Annotated[int, Field(ge=0, le=6)]


def clean_reminder(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    if not REMINDER_PATTERN.match(value):
        raise ValueError("Please enter a valid time in 24-hour format (HH:MM).")
    return value


class Payload(BaseModel):
    """Accepts camelCase keys from clients and snake_case from Python callers."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    @classmethod
    def parse(cls, payload: Any):
        """Validate ``payload`` or raise :class:`ValidationFailed`."""

        if not isinstance(payload, dict):
            raise ValidationFailed("Request body must be a JSON object.")
        try:
            return cls.model_validate(payload)
        except ValidationError as exc:
            raise ValidationFailed.from_pydantic(exc) from exc


class HabitForm(Payload):
    """Payload for creating a habit."""

    name: str = Field(min_length=1, max_length=120, description="Short label for the habit")
    description: Optional[str] = Field(default=None, max_length=500)
    color: Optional[str] = Field(default=None, max_length=32)
    frequency_days: list[Weekday] = Field(min_length=1, description="Weekdays, 0 = Sunday")
    reminder_time: Optional[str] = Field(default=None, description="HH:MM, never delivered")
    user_id: Optional[int] = None

    @field_validator("frequency_days")
    @classmethod
    def dedupe_days(cls, value: list[int]) -> list[int]:
        return sorted(set(value))

    @field_validator("reminder_time")
    @classmethod
    def validate_reminder(cls, value: Optional[str]) -> Optional[str]:
        return clean_reminder(value)

    def to_store(self) -> dict:
        return self.model_dump()


class HabitUpdateForm(Payload):
    """Partial update; omitted fields keep their stored value."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    description: Optional[str] = Field(default=None, max_length=500)
    color: Optional[str] = Field(default=None, max_length=32)
    frequency_days: Optional[list[Weekday]] = Field(default=None, min_length=1)
    reminder_time: Optional[str] = None
    user_id: Optional[int] = None

    @field_validator("frequency_days")
    @classmethod
    def dedupe_days(cls, value: Optional[list[int]]) -> Optional[list[int]]:
        return None if value is None else sorted(set(value))

    @field_validator("reminder_time")
    @classmethod
    def validate_reminder(cls, value: Optional[str]) -> Optional[str]:
        # An empty string is an explicit "no reminder"; keep it so the merge applies.
        if value is not None and not value.strip():
            return ""
        return clean_reminder(value)

    def to_store(self) -> dict:
        return self.model_dump(exclude_unset=True)


class CompletionForm(Payload):
    """Payload for marking a habit done (or not done) on a calendar day."""

    habit_id: int = Field(gt=0)
    date: dt.date
    completed: bool = True

    @field_validator("date", mode="before")
    @classmethod
    def normalize(cls, value: Any) -> Any:
        try:
            return normalize_date(value)
        except (TypeError, ValueError) as exc:
            raise ValueError("Expected an ISO calendar date or timestamp.") from exc


__all__ = [
    "CompletionForm",
    "HabitForm",
    "HabitUpdateForm",
    "Payload",
    "REMINDER_PATTERN",
    "clean_reminder",
]
