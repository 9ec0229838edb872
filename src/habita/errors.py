"""Exception types surfaced to the presentation layer."""

from __future__ import annotations


class HabitaError(Exception):
    """Base class for errors that carry a user-facing message."""

    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else self.__class__.__name__


class ValidationError(HabitaError, ValueError):
    """User input was rejected before anything was written."""


class PersistenceError(HabitaError, RuntimeError):
    """A commit to the store failed; the previous state is retained."""


class NotFoundError(HabitaError, LookupError):
    """The requested habit or record does not exist."""


__all__ = ["HabitaError", "NotFoundError", "PersistenceError", "ValidationError"]
