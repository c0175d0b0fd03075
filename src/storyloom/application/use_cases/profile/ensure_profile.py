"""Get or create the caller's profile."""

import logging

from storyloom.domain.entities import Profile

logger = logging.getLogger(__name__)

DEFAULT_USERNAME = "Writer"


def default_username(email: str | None, username: str | None = None) -> str:
    """Username for a fresh profile: email local part, token username, or a default."""
    if email and "@" in email:
        local = email.split("@", 1)[0].strip()
        if local:
            return local
    return (username or "").strip() or DEFAULT_USERNAME


class EnsureProfileUseCase:
    """Return the user's profile, creating it on first access."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self, user_id: str, email: str | None = None, username: str | None = None
    ) -> Profile:
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_id(user_id)
            if profile:
                return profile
            profile = Profile(id=user_id, username=default_username(email, username))
            await uow.profiles.create(profile)
        logger.info("Created profile for %s", user_id)
        return profile
