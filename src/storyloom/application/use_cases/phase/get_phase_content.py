"""Get phase content use case."""

from uuid import UUID

from storyloom.application.dto.phase_dto import PhaseContent
from storyloom.application.ports import PermissionChecker
from storyloom.domain.exceptions import NotFound, PermissionDenied
from storyloom.domain.value_objects import ProjectAction


class GetPhaseContentUseCase:
    """Load a phase body with the metadata the editor needs."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, user_id: str, phase_id: UUID) -> PhaseContent:
        async with self._uow_factory() as uow:
            phase = await uow.phases.get_by_id(phase_id)
            if not phase:
                raise NotFound("Phase", str(phase_id))
            module = await uow.modules.get_by_id(phase.module_id)
            project = await uow.projects.get_by_id(module.project_id) if module else None
            if not module or not project:
                raise NotFound("Phase", str(phase_id))

            has_read = await self._permission_checker.check(
                user_id, project.id, ProjectAction.READ
            )
            if not has_read:
                raise PermissionDenied("User does not have read access to project")

        return PhaseContent(
            phase_id=phase.id,
            module_id=module.id,
            project_id=project.id,
            owner_id=project.owner_id,
            title=phase.title,
            description=phase.description,
            body=phase.content,
            assigned_to=phase.assigned_to,
            updated_at=phase.updated_at,
            module_title=module.title,
        )
