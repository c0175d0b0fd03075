"""Invite lifecycle states."""

from enum import StrEnum


class InviteStatus(StrEnum):
    """State of a project membership row.

    Rows start ``pending`` and move exactly once to ``accepted`` or ``rejected``.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
