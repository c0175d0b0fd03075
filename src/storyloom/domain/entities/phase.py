"""Phase entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class Phase:
    """Phase - a chapter or episode holding the prose body."""

    id: UUID
    module_id: UUID
    title: str
    created_at: datetime
    updated_at: datetime
    content: str = ""
    description: str | None = None
    assigned_to: str | None = None
