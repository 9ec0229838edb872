"""Write operations on habits and their daily records."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..domain.repositories import HabitRepository
from ..errors import NotFoundError, ValidationError
from ..logging_config import get_logger
from ..models.habit import Habit, HabitRecord, HabitType
from .dates import as_day
from .forms import HabitForm

logger = get_logger(__name__)


def save_habit(
    *, repository: HabitRepository, form: HabitForm, habit: Optional[Habit] = None
) -> Habit:
    """Create a habit from ``form``, or update ``habit`` when editing.

    Validation happens before anything is written.
    """

    form.validate()
    if habit is None:
        return repository.create(form.apply_to(Habit(name=form.name.strip())))
    return repository.update(form.apply_to(habit))


def get_habit(*, repository: HabitRepository, habit_id: int) -> Habit:
    habit = repository.get_by_id(habit_id)
    if habit is None:
        raise NotFoundError(f"Habit {habit_id} not found")
    return habit


def delete_habit(*, repository: HabitRepository, habit_id: int) -> None:
    """Delete a habit together with all of its records."""

    if not repository.delete(habit_id):
        raise NotFoundError(f"Habit {habit_id} not found")


def record_day(
    *,
    repository: HabitRepository,
    habit: Habit,
    day: date | datetime,
    is_completed: Optional[bool] = None,
    quantity: Optional[int] = None,
    scale_value: Optional[int] = None,
) -> HabitRecord:
    """Store the value for ``day``, creating that day's record on first use.

    Only the value that matches the habit's type may be given.
    """

    habit_type = habit.habit_type
    if habit_type is None:
        raise ValidationError(f"Habit {habit.name!r} has an unknown type")

    record = repository.get_record(habit.id, as_day(day))
    if record is None:
        record = HabitRecord(habit_id=habit.id, recorded_on=as_day(day))

    if habit_type is HabitType.QUANTITATIVE:
        if is_completed is None or quantity is not None or scale_value is not None:
            raise ValidationError("Mark this habit as completed or not done")
        record.is_completed = bool(is_completed)
    elif habit_type is HabitType.QUALITATIVE:
        if quantity is None or is_completed is not None or scale_value is not None:
            raise ValidationError("Enter a count for this habit")
        if quantity < 0:
            raise ValidationError("Count cannot be negative")
        record.quantity = quantity
    elif habit_type is HabitType.SCALABLE:
        if scale_value is None or is_completed is not None or quantity is not None:
            raise ValidationError("Enter a rating for this habit")
        if not 0 <= scale_value <= habit.scale_max:
            raise ValidationError(f"Rating must be between 0 and {habit.scale_max}")
        record.scale_value = scale_value

    saved = repository.save_record(record)
    logger.info(
        "Habit day recorded",
        extra={"habit_id": habit.id, "day": as_day(day).isoformat(), "habit_type": habit_type.value},
    )
    return saved


def clear_day(*, repository: HabitRepository, habit: Habit, day: date | datetime) -> bool:
    """Remove whatever was recorded for ``day``."""

    removed = repository.delete_record(habit.id, as_day(day))
    if removed:
        logger.info("Habit day cleared", extra={"habit_id": habit.id, "day": as_day(day).isoformat()})
    return removed


__all__ = ["clear_day", "delete_habit", "get_habit", "record_day", "save_habit"]
