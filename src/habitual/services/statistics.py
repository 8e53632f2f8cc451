"""Completion statistics derived from habit and completion records.

Every function recomputes from the store on each call; nothing is cached. A
habit counts as *scheduled* on a date when the date's Sunday-based weekday is
in its ``frequency_days``. Rates are integer percentages rounded half up, and
an empty denominator always yields 0.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import TYPE_CHECKING, Iterable

from ..dates import (
    day_label,
    format_iso,
    month_dates,
    range_label,
    trailing_days,
    utc_today,
    week_dates,
    weekday_index,
)
from ..errors import NotFoundError
from ..models.habit import Habit, HabitCompletion

if TYPE_CHECKING:  # pragma: no cover
    from ..domain.repositories.habit import HabitStore

ROLLING_WINDOW_DAYS = 7
TREND_WEEKS = 8

CompletionKey = tuple[int, date]


@dataclass(slots=True)
class HabitWithCompletions:
    habit: Habit
    completions: list[HabitCompletion] = field(default_factory=list)
    completion_rate: int = 0


@dataclass(slots=True)
class HabitStatistics:
    """Dashboard snapshot.

    ``weekly_streak`` is the rolling 7-day completion percentage across all
    habits, not a count of days.
    """

    active_habits: int
    completed_today: int
    total_today: int
    weekly_streak: int
    longest_streak: int


@dataclass(slots=True)
class WeeklyCompletionData:
    day: str
    completion_rate: int


@dataclass(slots=True)
class HabitPerformance:
    habit_id: int
    habit_name: str
    completion_rate: int


@dataclass(slots=True)
class MonthlyHeatmapData:
    date: str
    value: int
    count: int
    total: int


@dataclass(slots=True)
class HabitTrendData:
    week: str
    completion_rate: int


@dataclass(slots=True)
class HabitComparisonData:
    habit_id: int
    name: str
    color: str | None
    current_week: int
    previous_week: int
    change: int


def percentage(part: int, whole: int) -> int:
    """Return ``part / whole`` as a percentage rounded half up; 0 if ``whole`` is 0."""

    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)


def completed_keys(completions: Iterable[HabitCompletion]) -> set[CompletionKey]:
    """Collect ``(habit_id, day)`` pairs whose record is marked completed."""

    return {(c.habit_id, c.date) for c in completions if c.completed}


def is_scheduled(habit: Habit, day: date) -> bool:
    return habit.is_scheduled_on(weekday_index(day))


def _tally(habit: Habit, days: Iterable[date], done: set[CompletionKey]) -> tuple[int, int]:
    """Return ``(scheduled, completed)`` for one habit over ``days``."""

    scheduled = completed = 0
    for day in days:
        if not is_scheduled(habit, day):
            continue
        scheduled += 1
        if (habit.id, day) in done:
            completed += 1
    return scheduled, completed


def habit_completion_rate(
    habit: Habit, done: set[CompletionKey], *, today: date
) -> int:
    """7-day completion rate for one habit ending on ``today``."""

    scheduled, completed = _tally(habit, trailing_days(today, ROLLING_WINDOW_DAYS), done)
    return percentage(completed, scheduled)


def compute_streaks(days: Iterable[date], *, today: date | None = None) -> tuple[int, int]:
    """Return (current_streak, longest_streak) from a collection of completed days."""

    today = today or utc_today()
    completed = set(days)

    # Current streak: walk backwards from today until a gap.
    current = 0
    cursor = today
    while cursor in completed:
        current += 1
        cursor -= timedelta(days=1)

    # Longest streak: sweep through sorted days, counting consecutive runs.
    longest = 0
    run = 0
    last_day: date | None = None
    for day in sorted(completed):
        if last_day is not None and day == last_day + timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        last_day = day

    return current, longest


def build_habits_with_completions(
    habits: Iterable[Habit], completions: Iterable[HabitCompletion], *, today: date
) -> list[HabitWithCompletions]:
    """Join each habit with its completion records and 7-day rate."""

    completions = list(completions)
    done = completed_keys(completions)
    by_habit: dict[int, list[HabitCompletion]] = {}
    for completion in completions:
        by_habit.setdefault(completion.habit_id, []).append(completion)

    return [
        HabitWithCompletions(
            habit=habit,
            completions=by_habit.get(habit.id, []),
            completion_rate=habit_completion_rate(habit, done, today=today),
        )
        for habit in habits
    ]


def calculate_completion_rate(
    store: "HabitStore", habit_id: int, *, today: date | None = None
) -> int:
    """Trailing 7-day completion rate for one habit; 0 for unknown habits."""

    habit = store.get_habit(habit_id)
    if habit is None:
        return 0
    done = completed_keys(store.list_completions())
    return habit_completion_rate(habit, done, today=today or utc_today())


def calculate_overall_completion_rate(
    store: "HabitStore", *, today: date | None = None
) -> int:
    """Trailing 7-day rate summed over every scheduled habit-instance."""

    today = today or utc_today()
    done = completed_keys(store.list_completions())
    window = trailing_days(today, ROLLING_WINDOW_DAYS)

    total_scheduled = total_completed = 0
    for habit in store.list_habits():
        scheduled, completed = _tally(habit, window, done)
        total_scheduled += scheduled
        total_completed += completed
    return percentage(total_completed, total_scheduled)


def longest_streak(store: "HabitStore", *, today: date | None = None) -> int:
    """Longest run of consecutive completed days for any single habit."""

    days_by_habit: dict[int, set[date]] = {}
    for habit_id, day in completed_keys(store.list_completions()):
        days_by_habit.setdefault(habit_id, set()).add(day)

    known = {habit.id for habit in store.list_habits()}
    return max(
        (
            compute_streaks(days, today=today)[1]
            for habit_id, days in days_by_habit.items()
            if habit_id in known
        ),
        default=0,
    )


def get_habit_statistics(store: "HabitStore", *, today: date | None = None) -> HabitStatistics:
    """Return the global dashboard snapshot for ``today``."""

    today = today or utc_today()
    habits = store.list_habits()
    done = completed_keys(store.list_completions())

    return HabitStatistics(
        active_habits=len(habits),
        completed_today=sum(1 for _, day in done if day == today),
        total_today=sum(1 for habit in habits if is_scheduled(habit, today)),
        weekly_streak=calculate_overall_completion_rate(store, today=today),
        longest_streak=longest_streak(store, today=today),
    )


def get_weekly_completion_data(
    store: "HabitStore", *, today: date | None = None
) -> list[WeeklyCompletionData]:
    """One point per day of the Sunday..Saturday week containing ``today``."""

    today = today or utc_today()
    habits = store.list_habits()
    done = completed_keys(store.list_completions())

    points: list[WeeklyCompletionData] = []
    for day in week_dates(today):
        scheduled = sum(1 for habit in habits if is_scheduled(habit, day))
        completed = sum(1 for _, done_day in done if done_day == day)
        points.append(
            WeeklyCompletionData(day=day_label(day), completion_rate=percentage(completed, scheduled))
        )
    return points


def get_habit_performance(
    store: "HabitStore", *, today: date | None = None
) -> list[HabitPerformance]:
    """7-day completion rate for every habit, in store order."""

    today = today or utc_today()
    done = completed_keys(store.list_completions())
    return [
        HabitPerformance(
            habit_id=habit.id,
            habit_name=habit.name,
            completion_rate=habit_completion_rate(habit, done, today=today),
        )
        for habit in store.list_habits()
    ]


def get_monthly_heatmap_data(
    store: "HabitStore", year: int, month: int
) -> list[MonthlyHeatmapData]:
    """Per-day completion percentage for a 1-indexed month, ascending by date.

    Raises:
        ValueError: if ``month`` is outside 1..12
    """

    days = month_dates(year, month)
    habits = store.list_habits()
    done = completed_keys(store.list_completions())

    entries: list[MonthlyHeatmapData] = []
    for day in days:
        scheduled = [habit for habit in habits if is_scheduled(habit, day)]
        completed = sum(1 for habit in scheduled if (habit.id, day) in done)
        entries.append(
            MonthlyHeatmapData(
                date=format_iso(day),
                value=percentage(completed, len(scheduled)),
                count=completed,
                total=len(scheduled),
            )
        )
    return entries


def get_habit_trends(
    store: "HabitStore", habit_id: int, *, today: date | None = None
) -> list[HabitTrendData]:
    """Weekly completion rate for one habit over the last eight weeks, oldest first.

    Raises:
        NotFoundError: if the habit does not exist
    """

    habit = store.get_habit(habit_id)
    if habit is None:
        raise NotFoundError("Habit not found")

    today = today or utc_today()
    done = completed_keys(store.list_completions())

    trends: list[HabitTrendData] = []
    for week_offset in range(TREND_WEEKS - 1, -1, -1):
        end = today - timedelta(days=7 * week_offset)
        start = end - timedelta(days=6)
        scheduled, completed = _tally(habit, trailing_days(end, 7), done)
        trends.append(
            HabitTrendData(week=range_label(start, end), completion_rate=percentage(completed, scheduled))
        )
    return trends


def get_habit_comparison(
    store: "HabitStore", *, today: date | None = None
) -> list[HabitComparisonData]:
    """Current vs previous 7-day rate for every habit, most improved first."""

    today = today or utc_today()
    done = completed_keys(store.list_completions())
    current_window = trailing_days(today, ROLLING_WINDOW_DAYS)
    previous_window = [day - timedelta(days=7) for day in current_window]

    results: list[HabitComparisonData] = []
    for habit in store.list_habits():
        scheduled, completed = _tally(habit, current_window, done)
        current = percentage(completed, scheduled)
        scheduled, completed = _tally(habit, previous_window, done)
        previous = percentage(completed, scheduled)
        results.append(
            HabitComparisonData(
                habit_id=habit.id,
                name=habit.name,
                color=habit.color,
                current_week=current,
                previous_week=previous,
                change=current - previous,
            )
        )
    return sorted(results, key=lambda item: item.change, reverse=True)


__all__ = [
    "HabitComparisonData",
    "HabitPerformance",
    "HabitStatistics",
    "HabitTrendData",
    "HabitWithCompletions",
    "MonthlyHeatmapData",
    "WeeklyCompletionData",
    "build_habits_with_completions",
    "calculate_completion_rate",
    "calculate_overall_completion_rate",
    "completed_keys",
    "compute_streaks",
    "get_habit_comparison",
    "get_habit_performance",
    "get_habit_statistics",
    "get_habit_trends",
    "get_monthly_heatmap_data",
    "get_weekly_completion_data",
    "habit_completion_rate",
    "is_scheduled",
    "longest_streak",
    "percentage",
]
