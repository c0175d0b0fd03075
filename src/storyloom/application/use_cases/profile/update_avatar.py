"""Upload a new profile picture."""

from storyloom.application.ports import AvatarStorage
from storyloom.application.use_cases.profile.ensure_profile import default_username
from storyloom.domain.entities import Profile
from storyloom.domain.exceptions import ValidationError


class UpdateAvatarUseCase:
    """Store an avatar image and point the profile at it."""

    def __init__(
        self,
        unit_of_work_factory: type,
        storage: AvatarStorage,
        max_bytes: int,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._storage = storage
        self._max_bytes = max_bytes

    async def execute(
        self, user_id: str, data: bytes, content_type: str, email: str | None = None
    ) -> Profile:
        if not content_type.startswith("image/"):
            raise ValidationError("Avatar must be an image")
        if not data:
            raise ValidationError("Avatar is empty")
        if len(data) > self._max_bytes:
            raise ValidationError(f"Avatar exceeds {self._max_bytes} bytes")

        url = await self._storage.save(user_id, data, content_type)

        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_id(user_id)
            if profile:
                profile.avatar_url = url
                await uow.profiles.update(profile)
            else:
                profile = Profile(id=user_id, username=default_username(email), avatar_url=url)
                await uow.profiles.create(profile)
        return profile
