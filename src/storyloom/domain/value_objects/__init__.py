"""Domain value objects."""

from storyloom.domain.value_objects.email_address import EmailAddress
from storyloom.domain.value_objects.invite_status import InviteStatus
from storyloom.domain.value_objects.member_role import MemberRole
from storyloom.domain.value_objects.project_action import ProjectAction
from storyloom.domain.value_objects.save_status import SaveStatus
from storyloom.domain.value_objects.text_stats import TextStats

__all__ = [
    "EmailAddress",
    "InviteStatus",
    "MemberRole",
    "ProjectAction",
    "SaveStatus",
    "TextStats",
]
