"""Resolve the project a phase belongs to."""

from uuid import UUID

from storyloom.domain.entities import Phase, Project
from storyloom.domain.exceptions import NotFound


async def load_phase_with_project(uow, phase_id: UUID) -> tuple[Phase, Project]:
    """Return the phase and its project, or raise NotFound."""
    phase = await uow.phases.get_by_id(phase_id)
    if not phase:
        raise NotFound("Phase", str(phase_id))
    module = await uow.modules.get_by_id(phase.module_id)
    project = await uow.projects.get_by_id(module.project_id) if module else None
    if not project:
        raise NotFound("Phase", str(phase_id))
    return phase, project
