"""Project member roles."""

from enum import StrEnum


class MemberRole(StrEnum):
    """Role of a member within a team project."""

    OWNER = "owner"
    EDITOR = "editor"
