"""Module repository port."""

from typing import Protocol
from uuid import UUID

from storyloom.domain.entities import StoryModule


class ModuleRepository(Protocol):
    """Port for module persistence."""

    async def get_by_id(self, module_id: UUID) -> StoryModule | None: ...

    async def list_by_project(self, project_id: UUID) -> list[StoryModule]: ...

    async def create(self, module: StoryModule) -> StoryModule: ...
