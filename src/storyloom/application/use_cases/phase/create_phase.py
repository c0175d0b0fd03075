"""Create phase use case."""

from datetime import UTC, datetime
from uuid import uuid4

from storyloom.application.dto.phase_dto import PhaseCreateInput
from storyloom.application.ports import PermissionChecker
from storyloom.domain.entities import Phase
from storyloom.domain.exceptions import NotFound, PermissionDenied, ValidationError
from storyloom.domain.value_objects import ProjectAction


class CreatePhaseUseCase:
    """Add a phase to a module, optionally assigning a writer."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, user_id: str, input_data: PhaseCreateInput) -> Phase:
        """Create empty phase. Assignee must be the owner or an accepted member."""
        title = input_data.title.strip()
        if not title:
            raise ValidationError("Phase title is required")

        async with self._uow_factory() as uow:
            module = await uow.modules.get_by_id(input_data.module_id)
            if not module:
                raise NotFound("Module", str(input_data.module_id))

            has_admin = await self._permission_checker.check(
                user_id, module.project_id, ProjectAction.ADMIN
            )
            if not has_admin:
                raise PermissionDenied("User does not have admin access to project")

            assigned_to = input_data.assigned_to or None
            if assigned_to:
                project = await uow.projects.get_by_id(module.project_id)
                is_owner = project is not None and project.owner_id == assigned_to
                member = await uow.members.get_accepted(module.project_id, assigned_to)
                if not is_owner and not member:
                    raise ValidationError("Assigned writer is not a member of the project")

            now = datetime.now(UTC)
            phase = Phase(
                id=uuid4(),
                module_id=module.id,
                title=title,
                description=(input_data.description or "").strip() or None,
                assigned_to=assigned_to,
                content="",
                created_at=now,
                updated_at=now,
            )
            await uow.phases.create(phase)
        return phase
