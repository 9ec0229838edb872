"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.engine import Engine

from .config import BaseConfig
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories import SQLModelHabitRepository, SQLModelUserRepository


@dataclass
class AppContext:
    """Explicit handle on configuration and repositories, passed to every caller."""

    config: BaseConfig
    engine: Engine
    session_factory: SessionFactory
    habit_repo: SQLModelHabitRepository
    user_repo: SQLModelUserRepository

    @property
    def dev_mode(self) -> bool:
        return bool(self.config.DEV_MODE)

    def close(self) -> None:
        self.engine.dispose()


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create the engine, ensure the schema exists and wire repositories."""

    if config is None:
        config = BaseConfig()

    engine, session_factory = bootstrap_database(config)

    return AppContext(
        config=config,
        engine=engine,
        session_factory=session_factory,
        habit_repo=SQLModelHabitRepository(session_factory),
        user_repo=SQLModelUserRepository(session_factory),
    )
