"""Calendar helpers and the weekday numbering used for habit schedules.

Two weekday conventions exist:

* storage: ``1=Sunday .. 7=Saturday`` (what ``Habit.frequency`` holds)
* UI: ``1=Monday .. 7=Sunday`` (what the habit form shows)

Only :func:`ui_to_storage` and :func:`storage_to_ui` translate between them.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable

WEEKDAY_RANGE = range(1, 8)
WEEK_LENGTH = 7


def as_day(value: date | datetime) -> date:
    """Drop the time-of-day part of ``value``."""

    if isinstance(value, datetime):
        return value.date()
    return value


def is_same_day(first: date | datetime, second: date | datetime) -> bool:
    return as_day(first) == as_day(second)


def storage_weekday(day: date | datetime) -> int:
    """Weekday number in storage convention (1=Sunday..7=Saturday)."""

    # isoweekday: Monday=1 .. Sunday=7
    return as_day(day).isoweekday() % 7 + 1


def _check_weekday(value: int) -> int:
    if value not in WEEKDAY_RANGE:
        raise ValueError(f"Weekday must be between 1 and 7, got {value!r}")
    return value


def ui_to_storage(ui_day: int) -> int:
    """Map a UI weekday (1=Monday..7=Sunday) to storage (1=Sunday..7=Saturday)."""

    _check_weekday(ui_day)
    return 1 if ui_day == 7 else ui_day + 1


def storage_to_ui(storage_day: int) -> int:
    """Map a storage weekday (1=Sunday..7=Saturday) to UI (1=Monday..7=Sunday)."""

    _check_weekday(storage_day)
    return 7 if storage_day == 1 else storage_day - 1


def encode_frequency(ui_days: Iterable[int]) -> str:
    """Encode UI-numbered weekdays as the stored comma-joined frequency."""

    return ",".join(str(day) for day in sorted({ui_to_storage(d) for d in ui_days}))


def decode_frequency(frequency: str | None) -> list[int]:
    """Decode a stored frequency into sorted UI-numbered weekdays.

    Tokens that are not weekday numbers are ignored.
    """

    days = set()
    for token in (frequency or "").split(","):
        token = token.strip()
        if token.isdigit() and int(token) in WEEKDAY_RANGE:
            days.add(storage_to_ui(int(token)))
    return sorted(days)


def start_of_week(day: date) -> date:
    """Monday of the ISO week containing ``day``."""

    return day - timedelta(days=day.weekday())


def week_dates(week_offset: int = 0, *, today: date | None = None) -> list[date]:
    """The seven dates (Monday first) of the week ``week_offset`` weeks from today's."""

    today = today or date.today()
    start = start_of_week(today) + timedelta(weeks=week_offset)
    return [start + timedelta(days=i) for i in range(WEEK_LENGTH)]


def last_n_days(days: int, *, today: date | None = None) -> list[date]:
    """The ``days`` calendar days ending today, oldest first."""

    today = today or date.today()
    return [today - timedelta(days=i) for i in range(days - 1, -1, -1)]


def iter_days(start: date, end: date) -> Iterable[date]:
    """Yield every calendar day from ``start`` to ``end`` inclusive."""

    cursor = start
    while cursor <= end:
        yield cursor
        cursor += timedelta(days=1)


def week_range_label(week_offset: int = 0, *, today: date | None = None) -> str:
    """Human label like ``"Oct 13 - Oct 19"`` for the week at ``week_offset``."""

    dates = week_dates(week_offset, today=today)
    return f"{dates[0].strftime('%b')} {dates[0].day} - {dates[-1].strftime('%b')} {dates[-1].day}"


__all__ = [
    "as_day",
    "decode_frequency",
    "encode_frequency",
    "is_same_day",
    "iter_days",
    "last_n_days",
    "start_of_week",
    "storage_to_ui",
    "storage_weekday",
    "ui_to_storage",
    "week_dates",
    "week_range_label",
]
