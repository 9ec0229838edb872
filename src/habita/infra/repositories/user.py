"""SQLModel implementation of the profile repository."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from ...errors import PersistenceError
from ...logging_config import get_logger
from ...models.user import User
from ..database import SessionFactory

logger = get_logger(__name__)


class SQLModelUserRepository:
    """SQLModel-based profile repository."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get(self) -> Optional[User]:
        try:
            with self.session_factory() as session:
                user = session.exec(select(User).order_by(User.id)).first()  # type: ignore[arg-type]
                if user:
                    session.expunge(user)
                return user
        except SQLAlchemyError as exc:
            logger.exception("Failed to load user data")
            raise PersistenceError("Failed to load user data") from exc

    def save(self, user: User) -> User:
        try:
            with self.session_factory() as session:
                merged = session.merge(user)
                session.commit()
                session.refresh(merged)
                session.expunge(merged)
        except SQLAlchemyError as exc:
            logger.exception("Failed to save user data")
            raise PersistenceError("Failed to save user data") from exc
        return merged


__all__ = ["SQLModelUserRepository"]
