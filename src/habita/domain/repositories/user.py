"""User profile repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.user import User


class UserRepository(Protocol):
    """Repository for the single local profile."""

    def get(self) -> Optional[User]:
        """Return the profile, if onboarding has happened."""
        ...

    def save(self, user: User) -> User:
        """Create or update the profile."""
        ...
