"""In-process content store backed by the phase use cases."""

from uuid import UUID

import psycopg

from storyloom.application.dto.phase_dto import PhaseContent, PhaseContentUpdate
from storyloom.application.use_cases.phase.get_phase_content import GetPhaseContentUseCase
from storyloom.application.use_cases.phase.save_phase_content import SavePhaseContentUseCase
from storyloom.domain.exceptions import TransientWriteFailure


class UseCaseContentStore:
    """Content store acting on behalf of one user inside the server process."""

    def __init__(
        self,
        user_id: str,
        get_content: GetPhaseContentUseCase,
        save_content: SavePhaseContentUseCase,
    ) -> None:
        self._user_id = user_id
        self._get_content = get_content
        self._save_content = save_content

    async def fetch(self, phase_id: UUID) -> PhaseContent:
        return await self._get_content.execute(self._user_id, phase_id)

    async def update(self, phase_id: UUID, change: PhaseContentUpdate) -> None:
        try:
            await self._save_content.execute(self._user_id, phase_id, change)
        except psycopg.Error as e:
            raise TransientWriteFailure(f"Database write failed: {e}") from e
