"""PostgreSQL phase repository implementation."""

from datetime import datetime
from uuid import UUID

from psycopg import AsyncConnection

from storyloom.domain.entities import Phase

_SELECT = (
    "SELECT id, module_id, title, description, assigned_to, content, created_at, updated_at "
    "FROM phase"
)


def _row_to_phase(r: tuple) -> Phase:
    return Phase(
        id=r[0],
        module_id=r[1],
        title=r[2],
        description=r[3],
        assigned_to=r[4],
        content=r[5],
        created_at=r[6],
        updated_at=r[7],
    )


class PostgresPhaseRepository:
    """Phase repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, phase_id: UUID) -> Phase | None:
        """Get phase by id."""
        cur = await self._conn.execute(f"{_SELECT} WHERE id = %s", (phase_id,))
        r = await cur.fetchone()
        return _row_to_phase(r) if r else None

    async def list_by_module(self, module_id: UUID) -> list[Phase]:
        """List phases of module in creation order."""
        cur = await self._conn.execute(
            f"{_SELECT} WHERE module_id = %s ORDER BY created_at",
            (module_id,),
        )
        return [_row_to_phase(r) for r in await cur.fetchall()]

    async def create(self, phase: Phase) -> Phase:
        """Create phase."""
        await self._conn.execute(
            "INSERT INTO phase "
            "(id, module_id, title, description, assigned_to, content, created_at, updated_at) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s)",
            (
                phase.id,
                phase.module_id,
                phase.title,
                phase.description,
                phase.assigned_to,
                phase.content,
                phase.created_at,
                phase.updated_at,
            ),
        )
        return phase

    async def update_content(self, phase_id: UUID, content: str, updated_at: datetime) -> None:
        """Overwrite phase body."""
        await self._conn.execute(
            "UPDATE phase SET content=%s, updated_at=%s WHERE id=%s",
            (content, updated_at, phase_id),
        )

    async def delete(self, phase_id: UUID) -> None:
        """Delete phase (comments cascade)."""
        await self._conn.execute("DELETE FROM phase WHERE id = %s", (phase_id,))
