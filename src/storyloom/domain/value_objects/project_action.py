"""Actions a user can perform on a project."""

from enum import StrEnum


class ProjectAction(StrEnum):
    """Actions that can be performed on projects and everything under them."""

    READ = "read"
    WRITE = "write"
    COMMENT = "comment"
    ADMIN = "admin"
