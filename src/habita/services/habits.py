"""Habit completion and streak helpers."""

from __future__ import annotations

from datetime import date, timedelta
from enum import Enum
from typing import Optional

from ..models.habit import Habit, HabitRecord, HabitType
from .dates import as_day, iter_days, storage_weekday


class HabitStatus(str, Enum):
    """Outcome of a single day, as shown on the habit calendar."""

    COMPLETED = "completed"
    FAILED = "failed"
    NOT_TRACKED = "not_tracked"


def is_completed(record: HabitRecord, habit: Habit) -> bool:
    """Whether ``record`` meets the habit's goal. Unknown habit types never do."""

    habit_type = habit.habit_type
    if habit_type is HabitType.QUANTITATIVE:
        return bool(record.is_completed)
    if habit_type is HabitType.QUALITATIVE:
        return record.quantity >= habit.target_value
    if habit_type is HabitType.SCALABLE:
        return record.scale_value > 0
    return False


def records_by_day(habit: Habit) -> dict[date, HabitRecord]:
    """Index a habit's records by calendar day, keeping the first per day."""

    by_day: dict[date, HabitRecord] = {}
    for record in habit.records or []:
        if record.recorded_on is None:
            continue
        by_day.setdefault(as_day(record.recorded_on), record)
    return by_day


def day_status(habit: Habit, day: date) -> HabitStatus:
    record = records_by_day(habit).get(as_day(day))
    if record is None or habit.habit_type is None:
        return HabitStatus.NOT_TRACKED
    return HabitStatus.COMPLETED if is_completed(record, habit) else HabitStatus.FAILED


def current_streak(habit: Habit, as_of: Optional[date] = None) -> int:
    """Count consecutive completed scheduled days walking back from ``as_of``.

    Unscheduled days are skipped. A scheduled day without a record is skipped
    when it is ``as_of`` itself and ends the streak when it is earlier. The
    walk stops at the earliest recorded day, since every scheduled day before
    it has no record and would end the streak anyway.
    """

    as_of = as_day(as_of or date.today())
    weekdays = habit.weekdays
    by_day = records_by_day(habit)
    if not by_day or not weekdays:
        return 0

    earliest = min(by_day)
    streak = 0
    cursor = as_of
    while cursor >= earliest:
        if storage_weekday(cursor) in weekdays:
            record = by_day.get(cursor)
            if record is not None:
                if not is_completed(record, habit):
                    break
                streak += 1
            elif cursor < as_of:
                break
        cursor -= timedelta(days=1)
    return streak


def best_streak(habit: Habit) -> int:
    """Longest run of completed scheduled days between the first and last record."""

    weekdays = habit.weekdays
    by_day = records_by_day(habit)
    if not by_day:
        return 0

    best = 0
    run = 0
    for day in iter_days(min(by_day), max(by_day)):
        if storage_weekday(day) not in weekdays:
            continue
        record = by_day.get(day)
        if record is not None and is_completed(record, habit):
            run += 1
            best = max(best, run)
        else:
            run = 0
    return best


def compute_streaks(habit: Habit, *, today: Optional[date] = None) -> tuple[int, int]:
    """Return (current_streak, best_streak) for a habit."""

    return current_streak(habit, today), best_streak(habit)


__all__ = [
    "HabitStatus",
    "best_streak",
    "compute_streaks",
    "current_streak",
    "day_status",
    "is_completed",
    "records_by_day",
]
