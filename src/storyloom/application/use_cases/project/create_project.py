"""Create project use case."""

import logging
from datetime import UTC, datetime
from uuid import uuid4

from storyloom.application.dto.project_dto import ProjectCreateInput
from storyloom.domain.entities import Project, ProjectMember
from storyloom.domain.exceptions import ValidationError
from storyloom.domain.value_objects import EmailAddress, InviteStatus, MemberRole

logger = logging.getLogger(__name__)


def normalise_invites(raw: list[str]) -> list[EmailAddress]:
    """Parse, lower-case and de-duplicate invite emails, keeping input order."""
    seen: dict[str, EmailAddress] = {}
    for item in raw:
        if not item or not item.strip():
            continue
        try:
            email = EmailAddress(item)
        except ValueError as e:
            raise ValidationError(str(e)) from e
        seen.setdefault(email.value, email)
    return list(seen.values())


class CreateProjectUseCase:
    """Create project; for team projects add the owner as member and invite writers."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self, user_id: str, user_email: str | None, input_data: ProjectCreateInput
    ) -> Project:
        """Create project owned by user."""
        title = input_data.title.strip()
        if not title:
            raise ValidationError("Title is required")
        invites = normalise_invites(input_data.invites)
        if invites and not input_data.is_team:
            raise ValidationError("Only team projects can invite writers")

        now = datetime.now(UTC)
        project = Project(
            id=uuid4(),
            title=title,
            description=input_data.description.strip(),
            owner_id=user_id,
            is_team=input_data.is_team,
            created_at=now,
            updated_at=now,
        )

        async with self._uow_factory() as uow:
            await uow.projects.create(project)
            if project.is_team:
                members = [
                    ProjectMember(
                        id=uuid4(),
                        project_id=project.id,
                        invited_email=(user_email or "").strip().lower(),
                        role=MemberRole.OWNER,
                        status=InviteStatus.ACCEPTED,
                        created_at=now,
                        user_id=user_id,
                        invited_by=user_id,
                    )
                ]
                members.extend(
                    ProjectMember(
                        id=uuid4(),
                        project_id=project.id,
                        invited_email=email.value,
                        role=MemberRole.EDITOR,
                        status=InviteStatus.PENDING,
                        created_at=now,
                        invited_by=user_id,
                    )
                    for email in invites
                )
                await uow.members.create_batch(members)

        logger.info("Project %s created by %s with %d invites", project.id, user_id, len(invites))
        return project
