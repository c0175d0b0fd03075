"""Phase DTOs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class PhaseCreateInput:
    """Input for creating a phase."""

    module_id: UUID
    title: str
    description: str | None = None
    assigned_to: str | None = None


@dataclass
class PhaseContent:
    """Phase body plus the metadata the editor needs."""

    phase_id: UUID
    module_id: UUID
    project_id: UUID
    owner_id: str
    title: str
    body: str
    updated_at: datetime
    description: str | None = None
    assigned_to: str | None = None
    module_title: str | None = None

    def can_edit(self, user_id: str) -> bool:
        """Only the project owner or the assigned writer may change the body."""
        return user_id == self.owner_id or (
            self.assigned_to is not None and user_id == self.assigned_to
        )


@dataclass
class PhaseContentUpdate:
    """New body for a phase, stamped with the client's save time."""

    body: str
    updated_at: datetime
