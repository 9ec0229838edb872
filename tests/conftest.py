"""Pytest configuration and shared fixtures for Habita tests.

Provides an isolated SQLite database per test, repositories bound to it, and
factories for building habits either in memory (for the pure statistics
functions) or persisted through the repository.
"""

from __future__ import annotations

import tempfile
from datetime import date
from pathlib import Path
from typing import Iterable, Mapping

import pytest
from sqlmodel import SQLModel, create_engine

from habita.infra.database import create_session_factory
from habita.infra.repositories import SQLModelHabitRepository, SQLModelUserRepository
from habita.models import Habit, HabitRecord, HabitType
from habita.services.dates import encode_frequency

# Monday 2024-01-08 .. Sunday 2024-01-14
MON = date(2024, 1, 8)
TUE = date(2024, 1, 9)
WED = date(2024, 1, 10)
THU = date(2024, 1, 11)
FRI = date(2024, 1, 12)
SAT = date(2024, 1, 13)
SUN = date(2024, 1, 14)


def apply_value(record: HabitRecord, habit_type: HabitType, value) -> HabitRecord:
    """Write ``value`` into the field that matters for ``habit_type``."""

    if habit_type is HabitType.QUANTITATIVE:
        record.is_completed = bool(value)
    elif habit_type is HabitType.QUALITATIVE:
        record.quantity = int(value)
    else:
        record.scale_value = int(value)
    return record


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the one the application wires up."""
    return create_session_factory(db_engine)


@pytest.fixture
def habit_repo(session_factory) -> SQLModelHabitRepository:
    return SQLModelHabitRepository(session_factory)


@pytest.fixture
def user_repo(session_factory) -> SQLModelUserRepository:
    return SQLModelUserRepository(session_factory)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def make_habit():
    """Factory for in-memory habits with records attached.

    Returns:
        Callable: builds a transient Habit; ``records`` maps a day to the value
        for the habit's type (bool, quantity or rating).
    """

    def _make_habit(
        habit_type: HabitType | str = HabitType.QUANTITATIVE,
        *,
        ui_days: Iterable[int] = range(1, 8),
        target_value: int = 0,
        scale_range: str | None = None,
        records: Mapping[date, object] | None = None,
        name: str = "Test Habit",
        habit_id: int | None = None,
    ) -> Habit:
        raw_type = habit_type.value if isinstance(habit_type, HabitType) else habit_type
        habit = Habit(
            id=habit_id,
            name=name,
            type=raw_type,
            frequency=encode_frequency(ui_days),
            target_value=target_value,
            scale_range=scale_range,
        )
        parsed = HabitType.parse(raw_type) or HabitType.QUANTITATIVE
        for day, value in (records or {}).items():
            record = HabitRecord(recorded_on=day)
            habit.records.append(apply_value(record, parsed, value))
        return habit

    return _make_habit


@pytest.fixture
def habit_factory(habit_repo):
    """Factory for habits persisted through the repository.

    Returns:
        Callable: creates the habit and its records, then returns the
        reloaded habit with ``records`` populated.
    """

    def _create_habit(
        name: str = "Test Habit",
        habit_type: HabitType = HabitType.QUANTITATIVE,
        *,
        ui_days: Iterable[int] = range(1, 8),
        target_value: int = 0,
        scale_range: str | None = None,
        records: Mapping[date, object] | None = None,
    ) -> Habit:
        habit = habit_repo.create(
            Habit(
                name=name,
                type=habit_type.value,
                frequency=encode_frequency(ui_days),
                target_value=target_value,
                scale_range=scale_range,
            )
        )
        for day, value in (records or {}).items():
            record = HabitRecord(habit_id=habit.id, recorded_on=day)
            habit_repo.save_record(apply_value(record, habit_type, value))
        return habit_repo.get_by_id(habit.id)

    return _create_habit
