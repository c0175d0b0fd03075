"""Delete phase use case."""

from uuid import UUID

from storyloom.application.ports import PermissionChecker
from storyloom.domain.exceptions import NotFound, PermissionDenied
from storyloom.domain.value_objects import ProjectAction


class DeletePhaseUseCase:
    """Delete a phase and its comments."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, user_id: str, phase_id: UUID) -> None:
        async with self._uow_factory() as uow:
            phase = await uow.phases.get_by_id(phase_id)
            if not phase:
                raise NotFound("Phase", str(phase_id))
            module = await uow.modules.get_by_id(phase.module_id)
            if not module:
                raise NotFound("Module", str(phase.module_id))
            has_admin = await self._permission_checker.check(
                user_id, module.project_id, ProjectAction.ADMIN
            )
            if not has_admin:
                raise PermissionDenied("User does not have admin access to project")
            await uow.phases.delete(phase_id)
