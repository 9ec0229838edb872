"""Habit tracking data structures."""

from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum
from typing import ClassVar, Optional

from sqlalchemy import UniqueConstraint
from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

DEFAULT_EMOJI = "🏃‍♂️"
DEFAULT_SCALE_RANGE = 10


class HabitType(str, Enum):
    """How a habit's daily progress is measured."""

    QUANTITATIVE = "quantitative"  # done / not done
    QUALITATIVE = "qualitative"  # count towards a daily target
    SCALABLE = "scalable"  # rating on a 0..scale_range scale

    @classmethod
    def parse(cls, raw: object) -> Optional["HabitType"]:
        """Return the matching type, or None for missing/unrecognized values."""

        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return None

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Habit(SQLModel, table=True):
    """A user-defined habit scheduled on a set of weekdays."""

    __tablename__: ClassVar[str] = "habit"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=80, index=True)
    emoji: str = Field(default=DEFAULT_EMOJI, max_length=16)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    type: str = Field(default=HabitType.QUANTITATIVE.value, max_length=32)
    # Comma-joined weekday numbers, 1=Sunday..7=Saturday.
    frequency: str = Field(default="1,2,3,4,5,6,7", max_length=32)
    target_value: int = Field(default=0, nullable=False)
    scale_range: Optional[str] = Field(default=None, max_length=16)

    records: list["HabitRecord"] = Relationship(
        sa_relationship=relationship(
            "HabitRecord",
            back_populates="habit",
            cascade="all, delete-orphan",
        ),
    )

    @property
    def habit_type(self) -> Optional[HabitType]:
        return HabitType.parse(self.type)

    @property
    def weekdays(self) -> frozenset[int]:
        """Scheduled weekdays in storage numbering; unparseable tokens are dropped."""

        days = set()
        for token in (self.frequency or "").split(","):
            token = token.strip()
            if token.isdigit() and 1 <= int(token) <= 7:
                days.add(int(token))
        return frozenset(days)

    @property
    def scale_max(self) -> int:
        try:
            value = int(self.scale_range) if self.scale_range is not None else DEFAULT_SCALE_RANGE
        except ValueError:
            return DEFAULT_SCALE_RANGE
        return value if value > 0 else DEFAULT_SCALE_RANGE


class HabitRecord(SQLModel, table=True):
    """Progress logged for a habit on one calendar day."""

    __tablename__: ClassVar[str] = "habit_record"
    __table_args__ = (UniqueConstraint("habit_id", "recorded_on", name="uq_habit_record_day"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    habit_id: Optional[int] = Field(default=None, foreign_key="habit.id", index=True)
    recorded_on: date = Field(nullable=False, index=True)
    is_completed: bool = Field(default=False, nullable=False)
    quantity: int = Field(default=0, nullable=False)
    scale_value: int = Field(default=0, nullable=False)

    habit: Optional["Habit"] = Relationship(
        sa_relationship=relationship("Habit", back_populates="records"),
    )
