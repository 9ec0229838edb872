"""Local user profile."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class User(SQLModel, table=True):
    """The single profile captured during onboarding.

    The presence of a row is what marks onboarding as complete.
    """

    __tablename__: ClassVar[str] = "user"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=64)
    surname: str = Field(nullable=False, max_length=64)
    age: int = Field(nullable=False)
    gender: str = Field(default="", max_length=32)
