"""PostgreSQL connection pool for docflow."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import psycopg
from psycopg_pool import AsyncConnectionPool

logger = logging.getLogger(__name__)


def create_pool(
    conninfo: str,
    min_size: int = 2,
    max_size: int = 10,
    *,
    acquire_timeout: float = 30.0,
) -> AsyncConnectionPool:
    """Create the (unopened) pool backing every unit of work.

    Connections run with autocommit off: each unit of work is one explicit
    transaction ended by commit or rollback. The pool is opened by
    ``PoolLifespanMiddleware`` at ASGI startup.
    """
    return AsyncConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        timeout=acquire_timeout,
        kwargs={"autocommit": False},
        name="docflow",
        open=False,
    )


@asynccontextmanager
async def get_connection(pool: AsyncConnectionPool) -> AsyncIterator[psycopg.AsyncConnection]:
    async with pool.connection() as conn:
        yield conn


async def check_connection(pool: AsyncConnectionPool) -> bool:
    """Readiness probe: ``SELECT 1`` on a pooled connection."""
    try:
        async with get_connection(pool) as conn:
            cur = await conn.execute("SELECT 1")
            return (await cur.fetchone()) == (1,)
    except psycopg.Error:
        logger.warning("database readiness check failed", exc_info=True)
        return False
