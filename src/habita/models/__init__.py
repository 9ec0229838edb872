"""SQLModel table exports."""

from .habit import Habit, HabitRecord, HabitType
from .user import User

__all__ = [
    "Habit",
    "HabitRecord",
    "HabitType",
    "User",
]
