"""PostgreSQL comment repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from storyloom.domain.entities import Comment

_SELECT = (
    "SELECT c.id, c.phase_id, c.user_id, c.content, c.parent_id, c.resolved, c.created_at, "
    "pr.username, pr.avatar_url "
    "FROM comment c LEFT JOIN profile pr ON pr.id = c.user_id"
)


def _row_to_comment(r: tuple) -> Comment:
    return Comment(
        id=r[0],
        phase_id=r[1],
        user_id=r[2],
        content=r[3],
        parent_id=r[4],
        resolved=r[5],
        created_at=r[6],
        author_username=r[7],
        author_avatar_url=r[8],
    )


class PostgresCommentRepository:
    """Comment repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, comment_id: UUID) -> Comment | None:
        """Get comment by id."""
        cur = await self._conn.execute(f"{_SELECT} WHERE c.id = %s", (comment_id,))
        r = await cur.fetchone()
        return _row_to_comment(r) if r else None

    async def list_by_phase(self, phase_id: UUID) -> list[Comment]:
        """List comments of phase, oldest first, with author profile."""
        cur = await self._conn.execute(
            f"{_SELECT} WHERE c.phase_id = %s ORDER BY c.created_at, c.id",
            (phase_id,),
        )
        return [_row_to_comment(r) for r in await cur.fetchall()]

    async def create(self, comment: Comment) -> Comment:
        """Create comment."""
        await self._conn.execute(
            "INSERT INTO comment (id, phase_id, user_id, content, parent_id, resolved, created_at) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s)",
            (
                comment.id,
                comment.phase_id,
                comment.user_id,
                comment.content,
                comment.parent_id,
                comment.resolved,
                comment.created_at,
            ),
        )
        return comment

    async def set_resolved(self, comment_id: UUID, resolved: bool) -> None:
        """Set resolved flag."""
        await self._conn.execute(
            "UPDATE comment SET resolved = %s WHERE id = %s",
            (resolved, comment_id),
        )

    async def delete(self, comment_id: UUID) -> None:
        """Delete comment (replies cascade)."""
        await self._conn.execute("DELETE FROM comment WHERE id = %s", (comment_id,))
