"""Permission checker port - project-level authorization."""

from typing import Protocol
from uuid import UUID

from storyloom.domain.value_objects import ProjectAction


class PermissionChecker(Protocol):
    """Port for checking user permissions on projects."""

    async def check(self, user_id: str, project_id: UUID, action: ProjectAction) -> bool: ...
