"""Resolve, unresolve and delete comments."""

from uuid import UUID

from storyloom.application.ports import ChangeNotifier, PermissionChecker
from storyloom.application.ports.change_notifier import comments_topic
from storyloom.application.use_cases.phase.lookup import load_phase_with_project
from storyloom.domain.entities import Comment
from storyloom.domain.exceptions import NotFound, PermissionDenied
from storyloom.domain.value_objects import ProjectAction


class SetCommentResolvedUseCase:
    """Mark a comment resolved or unresolved. Any project reader may do this."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        notifier: ChangeNotifier | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._notifier = notifier

    async def execute(
        self, user_id: str, comment_id: UUID, resolved: bool | None = None
    ) -> Comment:
        """Set resolved flag; ``None`` toggles the current value."""
        async with self._uow_factory() as uow:
            comment = await uow.comments.get_by_id(comment_id)
            if not comment:
                raise NotFound("Comment", str(comment_id))
            _, project = await load_phase_with_project(uow, comment.phase_id)
            can_comment = await self._permission_checker.check(
                user_id, project.id, ProjectAction.COMMENT
            )
            if not can_comment:
                raise PermissionDenied("User cannot comment on this project")

            comment.resolved = (not comment.resolved) if resolved is None else resolved
            await uow.comments.set_resolved(comment_id, comment.resolved)

        if self._notifier is not None:
            await self._notifier.publish(
                comments_topic(comment.phase_id),
                "comment.updated",
                {"id": str(comment.id), "resolved": comment.resolved},
            )
        return comment


class DeleteCommentUseCase:
    """Delete a comment. Only its author or the project owner may delete."""

    def __init__(
        self,
        unit_of_work_factory: type,
        notifier: ChangeNotifier | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._notifier = notifier

    async def execute(self, user_id: str, comment_id: UUID) -> None:
        async with self._uow_factory() as uow:
            comment = await uow.comments.get_by_id(comment_id)
            if not comment:
                raise NotFound("Comment", str(comment_id))
            _, project = await load_phase_with_project(uow, comment.phase_id)
            if user_id not in (comment.user_id, project.owner_id):
                raise PermissionDenied("Only the author or project owner can delete a comment")
            await uow.comments.delete(comment_id)

        if self._notifier is not None:
            await self._notifier.publish(
                comments_topic(comment.phase_id),
                "comment.deleted",
                {"id": str(comment_id)},
            )
