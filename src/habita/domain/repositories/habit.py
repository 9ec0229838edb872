"""Habit repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from ...models.habit import Habit, HabitRecord


class HabitRepository(Protocol):
    """Repository for habits and their daily records.

    Habits are returned with their ``records`` collection loaded so the
    statistics functions can work on detached instances.
    """

    def get_by_id(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        ...

    def list_all(self) -> list[Habit]:
        """List all habits, oldest first."""
        ...

    def create(self, habit: Habit) -> Habit:
        """Create a new habit."""
        ...

    def update(self, habit: Habit) -> Habit:
        """Update an existing habit."""
        ...

    def delete(self, habit_id: int) -> bool:
        """Delete a habit and its records. Returns False when it did not exist."""
        ...

    # Record operations
    def get_record(self, habit_id: int, day: date) -> Optional[HabitRecord]:
        """Get the record for a habit on a calendar day."""
        ...

    def list_records(self, habit_id: int) -> list[HabitRecord]:
        """All records of a habit, oldest first."""
        ...

    def save_record(self, record: HabitRecord) -> HabitRecord:
        """Insert or update a record."""
        ...

    def delete_record(self, habit_id: int, day: date) -> bool:
        """Delete the record for a calendar day."""
        ...
