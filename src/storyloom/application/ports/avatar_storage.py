"""Avatar storage port."""

from typing import Protocol


class AvatarStorage(Protocol):
    """Port for storing profile pictures and returning their public URL."""

    async def save(self, user_id: str, data: bytes, content_type: str) -> str: ...
