"""Comment DTOs."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class CommentCreateInput:
    """Input for a new comment or a reply."""

    phase_id: UUID
    content: str
    parent_id: UUID | None = None
