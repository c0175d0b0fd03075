"""Add comment use case."""

from datetime import UTC, datetime
from uuid import uuid4

from storyloom.application.dto.comment_dto import CommentCreateInput
from storyloom.application.ports import ChangeNotifier, PermissionChecker
from storyloom.application.ports.change_notifier import comments_topic
from storyloom.application.use_cases.phase.lookup import load_phase_with_project
from storyloom.domain.entities import Comment
from storyloom.domain.exceptions import NotFound, PermissionDenied, ValidationError
from storyloom.domain.value_objects import ProjectAction


class AddCommentUseCase:
    """Add a top-level comment or a reply to one."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        notifier: ChangeNotifier | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._notifier = notifier

    async def execute(self, user_id: str, input_data: CommentCreateInput) -> Comment:
        content = input_data.content.strip()
        if not content:
            raise ValidationError("Comment cannot be empty")

        async with self._uow_factory() as uow:
            _, project = await load_phase_with_project(uow, input_data.phase_id)
            has_comment = await self._permission_checker.check(
                user_id, project.id, ProjectAction.COMMENT
            )
            if not has_comment:
                raise PermissionDenied("User cannot comment on this project")

            if input_data.parent_id is not None:
                parent = await uow.comments.get_by_id(input_data.parent_id)
                if not parent or parent.phase_id != input_data.phase_id:
                    raise NotFound("Comment", str(input_data.parent_id))
                if parent.parent_id is not None:
                    raise ValidationError("Replies can only be added to top-level comments")

            comment = Comment(
                id=uuid4(),
                phase_id=input_data.phase_id,
                user_id=user_id,
                content=content,
                parent_id=input_data.parent_id,
                resolved=False,
                created_at=datetime.now(UTC),
            )
            await uow.comments.create(comment)
            profile = await uow.profiles.get_by_id(user_id)
            if profile:
                comment.author_username = profile.username
                comment.author_avatar_url = profile.avatar_url

        if self._notifier is not None:
            parent_id = str(comment.parent_id) if comment.parent_id else None
            await self._notifier.publish(
                comments_topic(comment.phase_id),
                "comment.created",
                {"id": str(comment.id), "parent_id": parent_id},
            )
        return comment
