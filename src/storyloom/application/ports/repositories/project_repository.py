"""Project repository port."""

from typing import Protocol
from uuid import UUID

from storyloom.domain.entities import Project


class ProjectRepository(Protocol):
    """Port for project persistence."""

    async def get_by_id(self, project_id: UUID) -> Project | None: ...

    async def list_for_user(
        self,
        user_id: str,
        *,
        cursor: str | None = None,
        limit: int = 20,
    ) -> tuple[list[Project], str | None]: ...

    async def create(self, project: Project) -> Project: ...

    async def update(self, project: Project) -> None: ...
