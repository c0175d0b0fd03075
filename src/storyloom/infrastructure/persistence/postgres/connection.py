"""PostgreSQL async connection pool."""

from psycopg_pool import AsyncConnectionPool


def create_pool(
    conninfo: str,
    *,
    min_size: int = 1,
    max_size: int = 10,
) -> AsyncConnectionPool:
    """Build the shared pool without connecting.

    The pool is opened by PoolLifespanMiddleware at ASGI startup. Connections
    are health-checked when handed out, so a restarted database does not
    surface as failed autosaves.
    """
    return AsyncConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        name="storyloom",
        check=AsyncConnectionPool.check_connection,
        open=False,
    )
