"""PostgreSQL profile repository implementation."""

from psycopg import AsyncConnection

from storyloom.domain.entities import Profile


class PostgresProfileRepository:
    """Profile repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, profile_id: str) -> Profile | None:
        """Get profile by id."""
        cur = await self._conn.execute(
            "SELECT id, username, avatar_url FROM profile WHERE id = %s",
            (profile_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return Profile(id=r[0], username=r[1], avatar_url=r[2])

    async def get_many(self, profile_ids: list[str]) -> list[Profile]:
        """Get profiles by ids."""
        cur = await self._conn.execute(
            "SELECT id, username, avatar_url FROM profile WHERE id = ANY(%s)",
            (profile_ids,),
        )
        rows = await cur.fetchall()
        return [Profile(id=r[0], username=r[1], avatar_url=r[2]) for r in rows]

    async def create(self, profile: Profile) -> Profile:
        """Create profile."""
        await self._conn.execute(
            "INSERT INTO profile (id, username, avatar_url) VALUES (%s, %s, %s)",
            (profile.id, profile.username, profile.avatar_url),
        )
        return profile

    async def update(self, profile: Profile) -> None:
        """Update profile."""
        await self._conn.execute(
            "UPDATE profile SET username=%s, avatar_url=%s WHERE id=%s",
            (profile.username, profile.avatar_url, profile.id),
        )
