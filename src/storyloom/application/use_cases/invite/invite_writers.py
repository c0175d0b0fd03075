"""Invite writers use case."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from storyloom.application.ports import PermissionChecker
from storyloom.application.use_cases.project.create_project import normalise_invites
from storyloom.domain.entities import ProjectMember
from storyloom.domain.exceptions import NotFound, PermissionDenied, ValidationError
from storyloom.domain.value_objects import InviteStatus, MemberRole, ProjectAction


class InviteWritersUseCase:
    """Invite writers by email to an existing team project."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(
        self, actor_id: str, project_id: UUID, emails: list[str]
    ) -> list[ProjectMember]:
        """Create pending invites. Actor must own the project."""
        has_admin = await self._permission_checker.check(actor_id, project_id, ProjectAction.ADMIN)
        if not has_admin:
            raise PermissionDenied("User does not have admin access to project")

        invites = normalise_invites(emails)
        if not invites:
            raise ValidationError("At least one email is required")

        async with self._uow_factory() as uow:
            project = await uow.projects.get_by_id(project_id)
            if not project:
                raise NotFound("Project", str(project_id))
            if not project.is_team:
                raise ValidationError("Only team projects can invite writers")

            existing = {
                m.invited_email
                for m in await uow.members.list_by_project(project_id)
                if m.status != InviteStatus.REJECTED
            }
            taken = [e.value for e in invites if e.value in existing]
            if taken:
                raise ValidationError(f"Already invited: {', '.join(taken)}")

            now = datetime.now(UTC)
            members = [
                ProjectMember(
                    id=uuid4(),
                    project_id=project_id,
                    invited_email=email.value,
                    role=MemberRole.EDITOR,
                    status=InviteStatus.PENDING,
                    created_at=now,
                    invited_by=actor_id,
                )
                for email in invites
            ]
            await uow.members.create_batch(members)
            return members
