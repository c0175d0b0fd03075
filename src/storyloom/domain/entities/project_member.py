"""Project member entity - doubles as an email invitation."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from storyloom.domain.value_objects import InviteStatus, MemberRole


@dataclass
class ProjectMember:
    """Membership of a user in a team project.

    Pending invites carry only ``invited_email``; ``user_id`` is filled in when
    the invitee accepts.
    """

    id: UUID
    project_id: UUID
    invited_email: str
    role: MemberRole
    status: InviteStatus
    created_at: datetime
    user_id: str | None = None
    invited_by: str | None = None
