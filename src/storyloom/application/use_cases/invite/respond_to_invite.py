"""Accept or reject an invite."""

import logging
from uuid import UUID

from storyloom.domain.entities import ProjectMember
from storyloom.domain.exceptions import InvalidInviteState, NotFound, PermissionDenied
from storyloom.domain.value_objects import InviteStatus

logger = logging.getLogger(__name__)


class RespondToInviteUseCase:
    """Move a pending invite to accepted or rejected."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self, user_id: str, user_email: str | None, invite_id: UUID, accept: bool
    ) -> ProjectMember:
        """Answer invite. Only the addressee can answer, and only once."""
        async with self._uow_factory() as uow:
            invite = await uow.members.get_by_id(invite_id)
            if not invite:
                raise NotFound("Invite", str(invite_id))
            if not user_email or invite.invited_email != user_email.strip().lower():
                raise PermissionDenied("Invite is addressed to another email")
            if invite.status != InviteStatus.PENDING:
                raise InvalidInviteState(f"Invite is already {invite.status}")

            if accept:
                invite.status = InviteStatus.ACCEPTED
                invite.user_id = user_id
            else:
                invite.status = InviteStatus.REJECTED
            await uow.members.update(invite)

        logger.info("Invite %s %s by %s", invite_id, invite.status, user_id)
        return invite
