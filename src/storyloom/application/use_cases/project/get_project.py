"""Get project use case."""

from uuid import UUID

from storyloom.application.dto.project_dto import ProjectDetail
from storyloom.application.ports import PermissionChecker
from storyloom.domain.exceptions import NotFound, PermissionDenied
from storyloom.domain.value_objects import InviteStatus, ProjectAction


class GetProjectUseCase:
    """Project dashboard: project, accepted members with profiles, modules."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, user_id: str, project_id: UUID) -> ProjectDetail:
        has_read = await self._permission_checker.check(user_id, project_id, ProjectAction.READ)
        if not has_read:
            raise PermissionDenied("User does not have read access to project")

        async with self._uow_factory() as uow:
            project = await uow.projects.get_by_id(project_id)
            if not project:
                raise NotFound("Project", str(project_id))
            members = await uow.members.list_by_project(project_id, InviteStatus.ACCEPTED)
            modules = await uow.modules.list_by_project(project_id)
            user_ids = [m.user_id for m in members if m.user_id]
            profiles = await uow.profiles.get_many(user_ids) if user_ids else []

        return ProjectDetail(
            project=project,
            members=members,
            modules=modules,
            profiles={p.id: p for p in profiles},
        )
