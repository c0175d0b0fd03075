"""Comment repository port."""

from typing import Protocol
from uuid import UUID

from storyloom.domain.entities import Comment


class CommentRepository(Protocol):
    """Port for comment persistence."""

    async def get_by_id(self, comment_id: UUID) -> Comment | None: ...

    async def list_by_phase(self, phase_id: UUID) -> list[Comment]: ...

    async def create(self, comment: Comment) -> Comment: ...

    async def set_resolved(self, comment_id: UUID, resolved: bool) -> None: ...

    async def delete(self, comment_id: UUID) -> None: ...
