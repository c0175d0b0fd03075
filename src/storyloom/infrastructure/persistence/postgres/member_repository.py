"""PostgreSQL project member repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from storyloom.domain.entities import ProjectMember
from storyloom.domain.value_objects import InviteStatus, MemberRole

_SELECT = (
    "SELECT id, project_id, invited_email, user_id, role, status, invited_by, created_at "
    "FROM project_member"
)


def _row_to_member(r: tuple) -> ProjectMember:
    return ProjectMember(
        id=r[0],
        project_id=r[1],
        invited_email=r[2],
        user_id=r[3],
        role=MemberRole(r[4]),
        status=InviteStatus(r[5]),
        invited_by=r[6],
        created_at=r[7],
    )


class PostgresMemberRepository:
    """Project member repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, member_id: UUID) -> ProjectMember | None:
        """Get member row by id."""
        cur = await self._conn.execute(f"{_SELECT} WHERE id = %s", (member_id,))
        r = await cur.fetchone()
        return _row_to_member(r) if r else None

    async def list_by_project(
        self, project_id: UUID, status: InviteStatus | None = None
    ) -> list[ProjectMember]:
        """List member rows of project, optionally filtered by status."""
        q = f"{_SELECT} WHERE project_id = %s"
        params: tuple = (project_id,)
        if status is not None:
            q += " AND status = %s"
            params += (status.value,)
        cur = await self._conn.execute(q + " ORDER BY created_at", params)
        return [_row_to_member(r) for r in await cur.fetchall()]

    async def list_pending_for_email(self, email: str) -> list[ProjectMember]:
        """List pending invites addressed to email."""
        cur = await self._conn.execute(
            f"{_SELECT} WHERE invited_email = %s AND status = %s ORDER BY created_at",
            (email, InviteStatus.PENDING.value),
        )
        return [_row_to_member(r) for r in await cur.fetchall()]

    async def get_accepted(self, project_id: UUID, user_id: str) -> ProjectMember | None:
        """Get accepted membership of user in project."""
        cur = await self._conn.execute(
            f"{_SELECT} WHERE project_id = %s AND user_id = %s AND status = %s",
            (project_id, user_id, InviteStatus.ACCEPTED.value),
        )
        r = await cur.fetchone()
        return _row_to_member(r) if r else None

    async def create_batch(self, members: list[ProjectMember]) -> list[ProjectMember]:
        """Insert member rows."""
        if not members:
            return members
        async with self._conn.cursor() as cur:
            await cur.executemany(
                "INSERT INTO project_member "
                "(id, project_id, invited_email, user_id, role, status, invited_by, created_at) "
                "VALUES (%s, %s, %s, %s, %s, %s, %s, %s)",
                [
                    (
                        m.id,
                        m.project_id,
                        m.invited_email,
                        m.user_id,
                        m.role.value,
                        m.status.value,
                        m.invited_by,
                        m.created_at,
                    )
                    for m in members
                ],
            )
        return members

    async def update(self, member: ProjectMember) -> None:
        """Update status, user and role of member row."""
        await self._conn.execute(
            "UPDATE project_member SET user_id=%s, role=%s, status=%s WHERE id=%s",
            (member.user_id, member.role.value, member.status.value, member.id),
        )
