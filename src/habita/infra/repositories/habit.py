"""SQLModel implementation of Habit repository."""

from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from ...errors import PersistenceError
from ...logging_config import get_logger
from ...models.habit import Habit, HabitRecord
from ..database import SessionFactory

logger = get_logger(__name__)


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    @staticmethod
    def _load(session: Session, habit_id: int) -> Optional[Habit]:
        statement = (
            select(Habit)
            .where(Habit.id == habit_id)
            .options(selectinload(Habit.records))  # type: ignore[arg-type]
        )
        habit = session.exec(statement).first()
        if habit:
            session.expunge(habit)
        return habit

    @staticmethod
    def _same_day(habit_id: int, day: date):
        return (
            select(HabitRecord)
            .where(HabitRecord.habit_id == habit_id)
            .where(HabitRecord.recorded_on == day)
            .order_by(HabitRecord.id)  # type: ignore[arg-type]
        )

    def get_by_id(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID with its records."""
        try:
            with self.session_factory() as session:
                return self._load(session, habit_id)
        except SQLAlchemyError as exc:
            logger.exception("Failed to load habit", extra={"habit_id": habit_id})
            raise PersistenceError("Failed to load habit") from exc

    def list_all(self) -> list[Habit]:
        """List all habits, oldest first, with their records."""
        statement = (
            select(Habit)
            .options(selectinload(Habit.records))  # type: ignore[arg-type]
            .order_by(Habit.created_at, Habit.id)  # type: ignore[arg-type]
        )
        try:
            with self.session_factory() as session:
                rows = list(session.exec(statement).all())
                session.expunge_all()
        except SQLAlchemyError as exc:
            logger.exception("Failed to load habits")
            raise PersistenceError("Failed to load habits") from exc
        return rows

    def create(self, habit: Habit) -> Habit:
        """Create a new habit."""
        try:
            with self.session_factory() as session:
                session.add(habit)
                session.commit()
                created = self._load(session, habit.id)
        except SQLAlchemyError as exc:
            logger.exception("Failed to save habit", extra={"habit_name": habit.name})
            raise PersistenceError("Failed to save habit") from exc
        logger.info("Habit created", extra={"habit_id": created.id, "habit_type": created.type})
        return created

    def update(self, habit: Habit) -> Habit:
        """Update an existing habit."""
        try:
            with self.session_factory() as session:
                merged = session.merge(habit)
                session.commit()
                updated = self._load(session, merged.id)
        except SQLAlchemyError as exc:
            logger.exception("Failed to save habit", extra={"habit_id": habit.id})
            raise PersistenceError("Failed to save habit") from exc
        logger.info("Habit updated", extra={"habit_id": updated.id})
        return updated

    def delete(self, habit_id: int) -> bool:
        """Delete a habit by ID; its records go with it."""
        try:
            with self.session_factory() as session:
                habit = session.get(Habit, habit_id)
                if habit is None:
                    return False
                session.delete(habit)
                session.commit()
        except SQLAlchemyError as exc:
            logger.exception("Failed to delete habit", extra={"habit_id": habit_id})
            raise PersistenceError("Failed to delete habit") from exc
        logger.info("Habit deleted", extra={"habit_id": habit_id})
        return True

    # Record operations
    def get_record(self, habit_id: int, day: date) -> Optional[HabitRecord]:
        """Get the record stored for ``day``."""
        try:
            with self.session_factory() as session:
                obj = session.exec(self._same_day(habit_id, day)).first()
                if obj:
                    session.expunge(obj)
                return obj
        except SQLAlchemyError as exc:
            logger.exception("Failed to load record", extra={"habit_id": habit_id})
            raise PersistenceError("Failed to load record") from exc

    def list_records(self, habit_id: int) -> list[HabitRecord]:
        """Return all records for a habit, oldest first."""
        statement = (
            select(HabitRecord)
            .where(HabitRecord.habit_id == habit_id)
            .order_by(HabitRecord.recorded_on)  # type: ignore[arg-type]
        )
        try:
            with self.session_factory() as session:
                rows = list(session.exec(statement).all())
                session.expunge_all()
        except SQLAlchemyError as exc:
            logger.exception("Failed to load records", extra={"habit_id": habit_id})
            raise PersistenceError("Failed to load records") from exc
        return rows

    def save_record(self, record: HabitRecord) -> HabitRecord:
        """Insert a record, or update the one already stored for that day."""
        try:
            with self.session_factory() as session:
                existing = session.exec(self._same_day(record.habit_id, record.recorded_on)).first()

                if existing:
                    existing.is_completed = record.is_completed
                    existing.quantity = record.quantity
                    existing.scale_value = record.scale_value
                    target = existing
                else:
                    target = record
                session.add(target)
                session.commit()
                session.refresh(target)
                session.expunge(target)
        except SQLAlchemyError as exc:
            logger.exception("Failed to save record", extra={"habit_id": record.habit_id})
            raise PersistenceError("Failed to save record") from exc
        return target

    def delete_record(self, habit_id: int, day: date) -> bool:
        """Delete the record stored for ``day``."""
        try:
            with self.session_factory() as session:
                record = session.exec(self._same_day(habit_id, day)).first()
                if record is None:
                    return False
                session.delete(record)
                session.commit()
        except SQLAlchemyError as exc:
            logger.exception("Failed to delete record", extra={"habit_id": habit_id})
            raise PersistenceError("Failed to delete record") from exc
        return True


__all__ = ["SQLModelHabitRepository"]
