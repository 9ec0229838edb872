"""Validation for the add/edit habit form and the profile form."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..errors import ValidationError
from ..models.habit import DEFAULT_EMOJI, Habit, HabitType
from ..models.user import User
from .dates import WEEKDAY_RANGE, decode_frequency, encode_frequency

EMOJI_CHOICES = ["🏃‍♂️", "💪", "📚", "🍎", "🚭", "🧘", "💧", "🛌", "✍️", "🧠"]
UI_DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def _positive_int(raw: str | int | None) -> Optional[int]:
    if raw is None:
        return None
    try:
        value = int(str(raw).strip())
    except ValueError:
        return None
    return value if value > 0 else None


@dataclass
class HabitForm:
    """Values entered in the add/edit habit form.

    ``selected_days`` use UI numbering (1=Monday..7=Sunday); numeric fields
    hold the raw text the user typed.
    """

    name: str = ""
    emoji: str = DEFAULT_EMOJI
    habit_type: Optional[HabitType] = HabitType.QUANTITATIVE
    target_value: str = ""
    scale_range: str = "10"
    selected_days: list[int] = field(default_factory=lambda: list(WEEKDAY_RANGE))

    @classmethod
    def from_habit(cls, habit: Habit) -> "HabitForm":
        """Populate the form from a stored habit.

        An unrecognized stored type leaves ``habit_type`` empty so saving
        requires choosing one.
        """

        return cls(
            name=habit.name or "",
            emoji=habit.emoji or DEFAULT_EMOJI,
            habit_type=habit.habit_type,
            target_value=str(habit.target_value) if habit.target_value > 0 else "",
            scale_range=habit.scale_range or "10",
            selected_days=decode_frequency(habit.frequency),
        )

    def validate(self) -> None:
        if not self.name.strip():
            raise ValidationError("Please enter habit name")
        if not self.selected_days:
            raise ValidationError("Please select at least one day")
        if any(day not in WEEKDAY_RANGE for day in self.selected_days):
            raise ValidationError("Please select valid days")
        if self.habit_type is None:
            raise ValidationError("Please select a habit type")
        if self.habit_type is HabitType.QUALITATIVE and _positive_int(self.target_value) is None:
            raise ValidationError("Please enter a valid target value (greater than 0)")
        if self.habit_type is HabitType.SCALABLE and _positive_int(self.scale_range) is None:
            raise ValidationError("Please enter a valid scale range (greater than 0)")

    def apply_to(self, habit: Habit) -> Habit:
        """Copy validated values onto ``habit`` and return it."""

        self.validate()
        habit.name = self.name.strip()
        habit.emoji = self.emoji or DEFAULT_EMOJI
        habit.type = self.habit_type.value
        habit.frequency = encode_frequency(self.selected_days)
        if self.habit_type is HabitType.QUALITATIVE:
            habit.target_value = _positive_int(self.target_value) or 0
        else:
            habit.target_value = 0
        if self.habit_type is HabitType.SCALABLE:
            habit.scale_range = str(_positive_int(self.scale_range))
        else:
            habit.scale_range = None
        return habit


@dataclass
class ProfileForm:
    """Values entered on the welcome/settings profile form."""

    name: str = ""
    surname: str = ""
    age: str = ""
    gender: str = ""

    @classmethod
    def from_user(cls, user: User) -> "ProfileForm":
        return cls(name=user.name, surname=user.surname, age=str(user.age), gender=user.gender)

    def validate(self) -> None:
        if not self.name.strip():
            raise ValidationError("Please enter your name")
        if not self.surname.strip():
            raise ValidationError("Please enter your surname")
        if _positive_int(self.age) is None:
            raise ValidationError("Please enter a valid age")

    def apply_to(self, user: User) -> User:
        self.validate()
        user.name = self.name.strip()
        user.surname = self.surname.strip()
        user.age = _positive_int(self.age) or 0
        user.gender = self.gender.strip()
        return user


__all__ = ["EMOJI_CHOICES", "HabitForm", "ProfileForm", "UI_DAY_NAMES"]
