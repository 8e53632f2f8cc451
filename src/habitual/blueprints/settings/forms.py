"""Settings form definitions."""

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator

from ..habits.forms import Payload, clean_reminder


class SettingsForm(Payload):
    """Reminder preferences; accepted and echoed back but never persisted."""

    notifications: bool = Field(default=True, description="Toggle reminder notifications")
    morning_reminder: Optional[str] = Field(default="08:00", description="HH:MM")
    evening_reminder: Optional[str] = Field(default="20:00", description="HH:MM")

    @field_validator("morning_reminder", "evening_reminder")
    @classmethod
    def validate_reminder(cls, value: Optional[str]) -> Optional[str]:
        return clean_reminder(value)


__all__ = ["SettingsForm"]
