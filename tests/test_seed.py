from __future__ import annotations

import random

from habitual.dates import weekday_index
from habitual.services.seed import SAMPLE_HABITS, seed_sample_data


def test_seed_creates_sample_habits(store, today):
    created = seed_sample_data(store, today=today, rng=random.Random(7))

    assert created == len(SAMPLE_HABITS) == 5
    assert [h.name for h in store.list_habits()] == [
        "Morning Workout",
        "Read Book",
        "Meditation",
        "Drink Water",
        "Journal",
    ]


def test_seed_history_covers_scheduled_days_only(store, today):
    seed_sample_data(store, today=today, rng=random.Random(7))

    habits = {h.id: h for h in store.list_habits()}
    completions = store.list_completions()

    # 14 days hold 10 weekdays: 2 weekday habits x 10 + 3 daily habits x 14.
    assert len(completions) == 62
    for completion in completions:
        assert habits[completion.habit_id].is_scheduled_on(weekday_index(completion.date))
        assert 0 <= (today - completion.date).days < 14


def test_seed_drink_water_always_completed(store, today):
    seed_sample_data(store, today=today, rng=random.Random(3))

    water = next(h for h in store.list_habits() if h.name == "Drink Water")
    records = [c for c in store.list_completions() if c.habit_id == water.id]

    assert len(records) == 14
    assert all(c.completed for c in records)


def test_seed_is_deterministic_with_rng(memory_store, today):
    from habitual.infra.repositories import InMemoryHabitStore

    other = InMemoryHabitStore()
    seed_sample_data(memory_store, today=today, rng=random.Random(11))
    seed_sample_data(other, today=today, rng=random.Random(11))

    flags = [(c.habit_id, c.date, c.completed) for c in memory_store.list_completions()]
    assert flags == [(c.habit_id, c.date, c.completed) for c in other.list_completions()]
