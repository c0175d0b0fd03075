"""Permission checker implementation - project ownership and accepted membership."""

from uuid import UUID

from storyloom.domain.value_objects import ProjectAction

MEMBER_ACTIONS = frozenset({ProjectAction.READ, ProjectAction.WRITE, ProjectAction.COMMENT})


class ProjectPermissionChecker:
    """Owners may do everything; accepted members may read, write and comment."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def check(self, user_id: str, project_id: UUID, action: ProjectAction) -> bool:
        """Check if user has action on project."""
        async with self._uow_factory() as uow:
            project = await uow.projects.get_by_id(project_id)
            if not project:
                return False
            if project.owner_id == user_id:
                return True
            if action not in MEMBER_ACTIONS:
                return False
            member = await uow.members.get_accepted(project_id, user_id)
            return member is not None
