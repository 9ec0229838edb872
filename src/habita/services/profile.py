"""Single local profile; its existence marks onboarding as complete."""

from __future__ import annotations

from typing import Optional

from ..domain.repositories import UserRepository
from ..logging_config import get_logger
from ..models.user import User
from .forms import ProfileForm

logger = get_logger(__name__)


def onboarding_complete(*, repository: UserRepository) -> bool:
    return repository.get() is not None


def get_profile(*, repository: UserRepository) -> Optional[User]:
    return repository.get()


def save_profile(*, repository: UserRepository, form: ProfileForm) -> User:
    """Create the profile on first save, update it afterwards."""

    form.validate()
    user = repository.get() or User(name="", surname="", age=0)
    saved = repository.save(form.apply_to(user))
    logger.info("Profile saved", extra={"user_id": saved.id})
    return saved


__all__ = ["get_profile", "onboarding_complete", "save_profile"]
