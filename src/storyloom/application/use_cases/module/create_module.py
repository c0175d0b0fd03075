"""Create module use case."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from storyloom.application.ports import PermissionChecker
from storyloom.domain.entities import StoryModule
from storyloom.domain.exceptions import NotFound, PermissionDenied, ValidationError
from storyloom.domain.value_objects import ProjectAction


class CreateModuleUseCase:
    """Add a module to a project."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(
        self,
        user_id: str,
        project_id: UUID,
        title: str,
        description: str | None = None,
    ) -> StoryModule:
        """Create module. Actor must own the project."""
        title = title.strip()
        if not title:
            raise ValidationError("Module title is required")
        has_admin = await self._permission_checker.check(user_id, project_id, ProjectAction.ADMIN)
        if not has_admin:
            raise PermissionDenied("User does not have admin access to project")

        async with self._uow_factory() as uow:
            project = await uow.projects.get_by_id(project_id)
            if not project:
                raise NotFound("Project", str(project_id))
            module = StoryModule(
                id=uuid4(),
                project_id=project_id,
                title=title,
                description=(description or "").strip() or None,
                created_at=datetime.now(UTC),
            )
            await uow.modules.create(module)
        return module
