"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from psycopg_pool import AsyncConnectionPool

from storyloom.infrastructure.persistence.postgres.comment_repository import (
    PostgresCommentRepository,
)
from storyloom.infrastructure.persistence.postgres.member_repository import (
    PostgresMemberRepository,
)
from storyloom.infrastructure.persistence.postgres.module_repository import (
    PostgresModuleRepository,
)
from storyloom.infrastructure.persistence.postgres.phase_repository import (
    PostgresPhaseRepository,
)
from storyloom.infrastructure.persistence.postgres.profile_repository import (
    PostgresProfileRepository,
)
from storyloom.infrastructure.persistence.postgres.project_repository import (
    PostgresProjectRepository,
)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._profiles = PostgresProfileRepository(self._conn)
        self._projects = PostgresProjectRepository(self._conn)
        self._members = PostgresMemberRepository(self._conn)
        self._modules = PostgresModuleRepository(self._conn)
        self._phases = PostgresPhaseRepository(self._conn)
        self._comments = PostgresCommentRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def profiles(self) -> PostgresProfileRepository:
        return self._profiles

    @property
    def projects(self) -> PostgresProjectRepository:
        return self._projects

    @property
    def members(self) -> PostgresMemberRepository:
        return self._members

    @property
    def modules(self) -> PostgresModuleRepository:
        return self._modules

    @property
    def phases(self) -> PostgresPhaseRepository:
        return self._phases

    @property
    def comments(self) -> PostgresCommentRepository:
        return self._comments

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager)."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        uow = PostgresUnitOfWork(pool)
        async with uow:
            try:
                yield uow
                await uow.commit()
            except BaseException:
                await uow.rollback()
                raise

    return factory
