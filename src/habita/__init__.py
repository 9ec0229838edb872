"""Habita: habit scheduling, streaks and statistics."""

from __future__ import annotations

from .config import BaseConfig, TestingConfig
from .context import AppContext, create_app_context

__all__ = ["AppContext", "BaseConfig", "TestingConfig", "create_app_context"]
