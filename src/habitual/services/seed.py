"""Sample data used for demos and first-run dashboards."""

from __future__ import annotations

import random
from datetime import date, timedelta
from typing import TYPE_CHECKING

from ..dates import utc_today, weekday_index
from ..logging_config import get_logger

if TYPE_CHECKING:  # pragma: no cover
    from ..domain.repositories.habit import HabitStore

logger = get_logger(__name__)

WEEKDAYS = [1, 2, 3, 4, 5]
EVERY_DAY = [0, 1, 2, 3, 4, 5, 6]
HISTORY_DAYS = 14

# (habit payload, probability a scheduled day was completed)
SAMPLE_HABITS: list[tuple[dict, float]] = [
    (
        {
            "name": "Morning Workout",
            "description": "30 minutes of exercise",
            "color": "#4F46E5",
            "frequency_days": WEEKDAYS,
            "reminder_time": "07:00",
        },
        0.75,
    ),
    (
        {
            "name": "Read Book",
            "description": "20 pages daily",
            "color": "#10B981",
            "frequency_days": EVERY_DAY,
            "reminder_time": "21:00",
        },
        0.9,
    ),
    (
        {
            "name": "Meditation",
            "description": "10 minutes of mindfulness",
            "color": "#F59E0B",
            "frequency_days": EVERY_DAY,
            "reminder_time": "08:00",
        },
        0.6,
    ),
    (
        {
            "name": "Drink Water",
            "description": "8 glasses daily",
            "color": "#4F46E5",
            "frequency_days": EVERY_DAY,
            "reminder_time": None,
        },
        1.0,
    ),
    (
        {
            "name": "Journal",
            "description": "Write daily thoughts",
            "color": "#DC2626",
            "frequency_days": WEEKDAYS,
            "reminder_time": "20:00",
        },
        0.3,
    ),
]


def seed_sample_data(
    store: "HabitStore",
    *,
    today: date | None = None,
    rng: random.Random | None = None,
) -> int:
    """Create the sample habits plus two weeks of completion history.

    Every scheduled day in the window gets a record; whether it is marked
    completed is drawn from the habit's completion probability.

    Returns:
        Number of habits created
    """

    today = today or utc_today()
    rng = rng or random.Random()

    created = []
    for payload, probability in SAMPLE_HABITS:
        created.append((store.create_habit(payload), probability))

    records = 0
    for offset in range(HISTORY_DAYS):
        day = today - timedelta(days=offset)
        for habit, probability in created:
            if not habit.is_scheduled_on(weekday_index(day)):
                continue
            store.upsert_completion(habit.id, day, rng.random() < probability)
            records += 1

    logger.info(
        "Seeded sample data", extra={"habits": len(created), "completions": records}
    )
    return len(created)


__all__ = ["SAMPLE_HABITS", "seed_sample_data"]
