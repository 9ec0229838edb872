"""Statistics and chart series derived from habit records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Sequence

from ..models.habit import Habit, HabitType
from .dates import as_day, last_n_days, week_dates
from .habits import (
    HabitStatus,
    compute_streaks,
    current_streak,
    day_status,
    is_completed,
    records_by_day,
)

MONTH_WEEKS = 4


@dataclass(slots=True)
class HabitSummary:
    """Per-habit figures for the statistics screen."""

    habit_id: Optional[int]
    name: str
    current_streak: int
    best_streak: int
    completion_percentage: int
    total_days: int
    total_quantity: Optional[int] = None
    average_rating: Optional[float] = None


@dataclass(slots=True)
class OverallSummary:
    """Figures aggregated across every habit."""

    total_habits: int
    average_completion: float
    best_current_streak: int
    active_days: int


def completion_percentage(habit: Habit) -> int:
    """Share of records that meet the goal, floored to a whole percent."""

    records = habit.records or []
    if not records:
        return 0
    completed = sum(1 for record in records if is_completed(record, habit))
    return completed * 100 // len(records)


def total_quantity(habit: Habit) -> int:
    return sum(record.quantity for record in habit.records or [])


def average_rating(habit: Habit) -> float:
    records = habit.records or []
    if not records:
        return 0.0
    return sum(record.scale_value for record in records) / len(records)


def total_days(habit: Habit) -> int:
    return len(habit.records or [])


def _value_of(habit: Habit, record) -> float:
    if record is None:
        return 0.0
    habit_type = habit.habit_type
    if habit_type is HabitType.QUANTITATIVE:
        return 1.0 if record.is_completed else 0.0
    if habit_type is HabitType.QUALITATIVE:
        return float(record.quantity)
    if habit_type is HabitType.SCALABLE:
        return float(record.scale_value)
    return 0.0


def daily_value(habit: Habit, day: date) -> float:
    """Chart value for one day: 1/0, a count, or a rating depending on type."""

    return _value_of(habit, records_by_day(habit).get(as_day(day)))


def _series(habit: Habit, days: Sequence[date]) -> list[float]:
    by_day = records_by_day(habit)
    return [_value_of(habit, by_day.get(day)) for day in days]


def weekly_series(habit: Habit, week_offset: int = 0, *, today: Optional[date] = None) -> list[float]:
    """Daily values for the Monday-first week ``week_offset`` weeks from today's."""

    return _series(habit, week_dates(week_offset, today=today))


def positive_mean(values: Iterable[float]) -> float:
    """Mean of the strictly positive values; 0 when there are none.

    Zero days (including days without a record) are left out of the
    denominator, which also hides genuine zero ratings.
    """

    positives = [value for value in values if value > 0]
    if not positives:
        return 0.0
    return sum(positives) / len(positives)


def monthly_series(habit: Habit, *, today: Optional[date] = None) -> list[float]:
    """Average daily value for each of the last four weeks, oldest first."""

    return [
        positive_mean(weekly_series(habit, -offset, today=today))
        for offset in range(MONTH_WEEKS - 1, -1, -1)
    ]


def week_labels(week_offset: int = 0, *, today: Optional[date] = None) -> list[str]:
    return [day.strftime("%a") for day in week_dates(week_offset, today=today)]


def month_labels() -> list[str]:
    return [f"Week {i}" for i in range(1, MONTH_WEEKS + 1)]


def recent_calendar(
    habit: Habit, days: int = 30, *, today: Optional[date] = None
) -> list[tuple[date, HabitStatus]]:
    """Status of each of the last ``days`` days, oldest first."""

    return [(day, day_status(habit, day)) for day in last_n_days(days, today=today)]


def summarize_habit(habit: Habit, *, today: Optional[date] = None) -> HabitSummary:
    current, best = compute_streaks(habit, today=today)
    habit_type = habit.habit_type
    return HabitSummary(
        habit_id=habit.id,
        name=habit.name,
        current_streak=current,
        best_streak=best,
        completion_percentage=completion_percentage(habit),
        total_days=total_days(habit),
        total_quantity=total_quantity(habit) if habit_type is HabitType.QUALITATIVE else None,
        average_rating=average_rating(habit) if habit_type is HabitType.SCALABLE else None,
    )


def active_days(habits: Iterable[Habit]) -> int:
    """Number of distinct calendar days with at least one record across habits."""

    days = {
        as_day(record.recorded_on)
        for habit in habits
        for record in habit.records or []
        if record.recorded_on is not None
    }
    return len(days)


def summarize_all(habits: Iterable[Habit], *, today: Optional[date] = None) -> OverallSummary:
    habits = list(habits)
    if not habits:
        return OverallSummary(total_habits=0, average_completion=0.0, best_current_streak=0, active_days=0)

    percentages = [completion_percentage(habit) for habit in habits]
    return OverallSummary(
        total_habits=len(habits),
        average_completion=sum(percentages) / len(habits),
        best_current_streak=max(current_streak(habit, today) for habit in habits),
        active_days=active_days(habits),
    )


__all__ = [
    "HabitSummary",
    "OverallSummary",
    "active_days",
    "average_rating",
    "completion_percentage",
    "daily_value",
    "month_labels",
    "monthly_series",
    "positive_mean",
    "recent_calendar",
    "summarize_all",
    "summarize_habit",
    "total_days",
    "total_quantity",
    "week_labels",
    "weekly_series",
]
