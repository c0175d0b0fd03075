"""Module entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class StoryModule:
    """Module - groups the phases (chapters, episodes) of a project."""

    id: UUID
    project_id: UUID
    title: str
    created_at: datetime
    description: str | None = None
