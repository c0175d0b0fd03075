"""PostgreSQL module repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from storyloom.domain.entities import StoryModule


class PostgresModuleRepository:
    """Module repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, module_id: UUID) -> StoryModule | None:
        """Get module by id."""
        cur = await self._conn.execute(
            "SELECT id, project_id, title, description, created_at FROM module WHERE id = %s",
            (module_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return StoryModule(
            id=r[0],
            project_id=r[1],
            title=r[2],
            description=r[3],
            created_at=r[4],
        )

    async def list_by_project(self, project_id: UUID) -> list[StoryModule]:
        """List modules of project in creation order."""
        cur = await self._conn.execute(
            "SELECT id, project_id, title, description, created_at FROM module "
            "WHERE project_id = %s ORDER BY created_at",
            (project_id,),
        )
        rows = await cur.fetchall()
        return [
            StoryModule(
                id=r[0],
                project_id=r[1],
                title=r[2],
                description=r[3],
                created_at=r[4],
            )
            for r in rows
        ]

    async def create(self, module: StoryModule) -> StoryModule:
        """Create module."""
        await self._conn.execute(
            "INSERT INTO module (id, project_id, title, description, created_at) "
            "VALUES (%s, %s, %s, %s, %s)",
            (module.id, module.project_id, module.title, module.description, module.created_at),
        )
        return module
