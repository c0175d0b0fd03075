"""Save phase content use case."""

import logging
from uuid import UUID

from storyloom.application.dto.phase_dto import PhaseContentUpdate
from storyloom.application.ports import ChangeNotifier
from storyloom.application.ports.change_notifier import phase_topic
from storyloom.domain.exceptions import NotFound, PermissionDenied

logger = logging.getLogger(__name__)


class SavePhaseContentUseCase:
    """Overwrite a phase body (last write wins, no version check)."""

    def __init__(
        self,
        unit_of_work_factory: type,
        notifier: ChangeNotifier | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._notifier = notifier

    async def execute(self, user_id: str, phase_id: UUID, change: PhaseContentUpdate) -> None:
        """Save body. Only the project owner or the assigned writer may write."""
        async with self._uow_factory() as uow:
            phase = await uow.phases.get_by_id(phase_id)
            if not phase:
                raise NotFound("Phase", str(phase_id))
            module = await uow.modules.get_by_id(phase.module_id)
            project = await uow.projects.get_by_id(module.project_id) if module else None
            if not project:
                raise NotFound("Phase", str(phase_id))

            if user_id != project.owner_id and user_id != phase.assigned_to:
                raise PermissionDenied("Only the project owner or assigned writer can edit")

            await uow.phases.update_content(phase_id, change.body, change.updated_at)

        logger.debug("Phase %s saved by %s (%d chars)", phase_id, user_id, len(change.body))
        if self._notifier is not None:
            await self._notifier.publish(
                phase_topic(phase_id),
                "phase.content_updated",
                {
                    "phase_id": str(phase_id),
                    "updated_by": user_id,
                    "updated_at": change.updated_at.isoformat(),
                },
            )
