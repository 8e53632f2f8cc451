"""JSON rendering for models and statistics DTOs (camelCase keys)."""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from typing import Any

from pydantic.alias_generators import to_camel

from .models.habit import Habit, HabitCompletion
from .services.statistics import HabitWithCompletions


def habit_to_json(habit: Habit) -> dict[str, Any]:
    return {
        "id": habit.id,
        "name": habit.name,
        "description": habit.description,
        "color": habit.color,
        "frequencyDays": list(habit.frequency_days or []),
        "reminderTime": habit.reminder_time,
        "createdAt": habit.created_at.isoformat() if habit.created_at else None,
        "userId": habit.user_id,
    }


def completion_to_json(completion: HabitCompletion) -> dict[str, Any]:
    return {
        "id": completion.id,
        "habitId": completion.habit_id,
        "date": completion.date.isoformat(),
        "completed": completion.completed,
        "userId": completion.user_id,
    }


def to_json(value: Any) -> Any:
    """Recursively convert records, DTOs and dates into JSON-ready values."""

    if isinstance(value, HabitWithCompletions):
        payload = habit_to_json(value.habit)
        payload["completions"] = [completion_to_json(c) for c in value.completions]
        payload["completionRate"] = value.completion_rate
        return payload
    if isinstance(value, Habit):
        return habit_to_json(value)
    if isinstance(value, HabitCompletion):
        return completion_to_json(value)
    if is_dataclass(value) and not isinstance(value, type):
        return {to_camel(f.name): to_json(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, (list, tuple)):
        return [to_json(item) for item in value]
    if isinstance(value, dict):
        return {key: to_json(item) for key, item in value.items()}
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


__all__ = ["completion_to_json", "habit_to_json", "to_json"]
