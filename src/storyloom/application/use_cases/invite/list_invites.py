"""List incoming invites use case."""

from dataclasses import dataclass

from storyloom.domain.entities import Project, ProjectMember
from storyloom.domain.value_objects import EmailAddress


@dataclass
class IncomingInvite:
    """Pending invite together with the project it is for."""

    invite: ProjectMember
    project: Project | None


class ListIncomingInvitesUseCase:
    """Pending invites addressed to the user's email."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, user_email: str | None) -> list[IncomingInvite]:
        if not user_email:
            return []
        try:
            email = EmailAddress(user_email)
        except ValueError:
            return []
        async with self._uow_factory() as uow:
            pending = await uow.members.list_pending_for_email(email.value)
            return [
                IncomingInvite(invite=m, project=await uow.projects.get_by_id(m.project_id))
                for m in pending
            ]
