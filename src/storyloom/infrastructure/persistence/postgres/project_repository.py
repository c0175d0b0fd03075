"""PostgreSQL project repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from storyloom.domain.entities import Project

_COLUMNS = "p.id, p.title, p.description, p.owner_id, p.is_team, p.created_at, p.updated_at"


def _row_to_project(r: tuple) -> Project:
    return Project(
        id=r[0],
        title=r[1],
        description=r[2],
        owner_id=r[3],
        is_team=r[4],
        created_at=r[5],
        updated_at=r[6],
    )


class PostgresProjectRepository:
    """Project repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, project_id: UUID) -> Project | None:
        """Get project by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM project p WHERE p.id = %s",
            (project_id,),
        )
        r = await cur.fetchone()
        return _row_to_project(r) if r else None

    async def list_for_user(
        self,
        user_id: str,
        *,
        cursor: str | None = None,
        limit: int = 20,
    ) -> tuple[list[Project], str | None]:
        """List projects the user owns or has joined, with cursor pagination."""
        conditions = [
            "(p.owner_id = %s OR EXISTS ("
            "SELECT 1 FROM project_member m WHERE m.project_id = p.id "
            "AND m.user_id = %s AND m.status = 'accepted'))"
        ]
        _params: list[object] = [user_id, user_id]
        if cursor:
            conditions.append("p.id > %s")
            _params.append(UUID(cursor))
        where = " AND ".join(conditions)
        params = tuple(_params) + (limit + 1,)
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM project p WHERE {where} ORDER BY p.id LIMIT %s",
            params,
        )
        rows = await cur.fetchall()
        projects = [_row_to_project(r) for r in rows[:limit]]
        next_cursor = str(rows[limit - 1][0]) if len(rows) > limit else None
        return projects, next_cursor

    async def create(self, project: Project) -> Project:
        """Create project."""
        await self._conn.execute(
            "INSERT INTO project (id, title, description, owner_id, is_team, created_at, updated_at) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s)",
            (
                project.id,
                project.title,
                project.description,
                project.owner_id,
                project.is_team,
                project.created_at,
                project.updated_at,
            ),
        )
        return project

    async def update(self, project: Project) -> None:
        """Update project."""
        await self._conn.execute(
            "UPDATE project SET title=%s, description=%s, is_team=%s, updated_at=%s WHERE id=%s",
            (project.title, project.description, project.is_team, project.updated_at, project.id),
        )
