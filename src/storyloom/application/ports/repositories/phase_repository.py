"""Phase repository port."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from storyloom.domain.entities import Phase


class PhaseRepository(Protocol):
    """Port for phase persistence."""

    async def get_by_id(self, phase_id: UUID) -> Phase | None: ...

    async def list_by_module(self, module_id: UUID) -> list[Phase]: ...

    async def create(self, phase: Phase) -> Phase: ...

    async def update_content(self, phase_id: UUID, content: str, updated_at: datetime) -> None: ...

    async def delete(self, phase_id: UUID) -> None: ...
