"""Content store port - where the editor reads and writes phase bodies."""

from typing import Protocol
from uuid import UUID

from storyloom.application.dto.phase_dto import PhaseContent, PhaseContentUpdate


class ContentStore(Protocol):
    """Port for fetching and overwriting a phase body.

    ``update`` is an unconditional last-write-wins overwrite.
    """

    async def fetch(self, phase_id: UUID) -> PhaseContent: ...

    async def update(self, phase_id: UUID, change: PhaseContentUpdate) -> None: ...
