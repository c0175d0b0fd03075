"""Project member (invite) repository port."""

from typing import Protocol
from uuid import UUID

from storyloom.domain.entities import ProjectMember
from storyloom.domain.value_objects import InviteStatus


class MemberRepository(Protocol):
    """Port for project membership and invite persistence."""

    async def get_by_id(self, member_id: UUID) -> ProjectMember | None: ...

    async def list_by_project(
        self, project_id: UUID, status: InviteStatus | None = None
    ) -> list[ProjectMember]: ...

    async def list_pending_for_email(self, email: str) -> list[ProjectMember]: ...

    async def get_accepted(self, project_id: UUID, user_id: str) -> ProjectMember | None: ...

    async def create_batch(self, members: list[ProjectMember]) -> list[ProjectMember]: ...

    async def update(self, member: ProjectMember) -> None: ...
