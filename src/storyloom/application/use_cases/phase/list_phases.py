"""List phases of a module."""

from uuid import UUID

from storyloom.application.ports import PermissionChecker
from storyloom.domain.entities import Phase, StoryModule
from storyloom.domain.exceptions import NotFound, PermissionDenied
from storyloom.domain.value_objects import ProjectAction


class ListPhasesUseCase:
    """Module page: the module and its phases in creation order."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, user_id: str, module_id: UUID) -> tuple[StoryModule, list[Phase]]:
        async with self._uow_factory() as uow:
            module = await uow.modules.get_by_id(module_id)
            if not module:
                raise NotFound("Module", str(module_id))
            has_read = await self._permission_checker.check(
                user_id, module.project_id, ProjectAction.READ
            )
            if not has_read:
                raise PermissionDenied("User does not have read access to project")
            phases = await uow.phases.list_by_module(module_id)
        return module, phases
