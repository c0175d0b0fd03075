"""List comment threads of a phase."""

from uuid import UUID

from storyloom.application.ports import PermissionChecker
from storyloom.application.use_cases.phase.lookup import load_phase_with_project
from storyloom.domain.entities import CommentThread, build_threads
from storyloom.domain.exceptions import PermissionDenied
from storyloom.domain.value_objects import ProjectAction


class ListCommentThreadsUseCase:
    """Rebuild threads from the flat comment list of a phase."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(
        self, user_id: str, phase_id: UUID, include_resolved: bool = False
    ) -> list[CommentThread]:
        async with self._uow_factory() as uow:
            _, project = await load_phase_with_project(uow, phase_id)
            has_read = await self._permission_checker.check(
                user_id, project.id, ProjectAction.READ
            )
            if not has_read:
                raise PermissionDenied("User does not have read access to project")
            comments = await uow.comments.list_by_phase(phase_id)
        return build_threads(comments, include_resolved=include_resolved)
