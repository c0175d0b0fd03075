"""Profile repository port."""

from typing import Protocol

from storyloom.domain.entities import Profile


class ProfileRepository(Protocol):
    """Port for profile persistence."""

    async def get_by_id(self, profile_id: str) -> Profile | None: ...

    async def get_many(self, profile_ids: list[str]) -> list[Profile]: ...

    async def create(self, profile: Profile) -> Profile: ...

    async def update(self, profile: Profile) -> None: ...
