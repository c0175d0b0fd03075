"""Project entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class Project:
    """Story project - solo or team, owned by one user."""

    id: UUID
    title: str
    owner_id: str
    is_team: bool
    created_at: datetime
    updated_at: datetime
    description: str = ""
