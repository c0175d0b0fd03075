"""Opens and closes the database pool with the ASGI lifespan."""

import logging
from typing import Any

from psycopg_pool import AsyncConnectionPool, PoolTimeout

logger = logging.getLogger(__name__)


class PoolLifespanMiddleware:
    """Fills the pool before the first request and drains it on shutdown.

    With ``wait_timeout`` set, startup blocks until ``min_size`` connections
    are up and fails the server start when the database stays unreachable.
    """

    def __init__(self, pool: AsyncConnectionPool, wait_timeout: float | None = None) -> None:
        self._pool = pool
        self._wait_timeout = wait_timeout

    async def process_startup(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        if self._wait_timeout is None:
            await self._pool.open()
        else:
            try:
                await self._pool.open(wait=True, timeout=self._wait_timeout)
            except PoolTimeout:
                logger.error("Database not reachable within %.0fs", self._wait_timeout)
                raise
        logger.info("Database pool %s opened (max %d)", self._pool.name, self._pool.max_size)

    async def process_shutdown(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.close()
        logger.info("Database pool %s closed", self._pool.name)
