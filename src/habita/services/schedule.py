"""Which days a habit is scheduled on, and which record belongs to a day."""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional

from ..models.habit import Habit, HabitRecord
from .dates import is_same_day, storage_weekday


def is_active(habit: Habit, day: date | datetime) -> bool:
    """True when ``day`` falls on one of the habit's scheduled weekdays."""

    return storage_weekday(day) in habit.weekdays


def record_for(habit: Habit, day: date | datetime) -> Optional[HabitRecord]:
    """Return the habit's record for the calendar day of ``day``.

    At most one record per day is expected. If duplicates slipped in, which
    one is returned is not guaranteed.
    """

    for record in habit.records or []:
        if record.recorded_on is not None and is_same_day(record.recorded_on, day):
            return record
    return None


def habits_for_day(habits: Iterable[Habit], day: date | datetime) -> list[Habit]:
    """Habits scheduled on ``day``, in their original order."""

    return [habit for habit in habits if is_active(habit, day)]


__all__ = ["habits_for_day", "is_active", "record_for"]
