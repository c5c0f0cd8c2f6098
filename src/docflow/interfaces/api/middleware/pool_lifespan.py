"""ASGI lifespan hooks for the PostgreSQL connection pool."""

import logging
from typing import Any

from psycopg_pool import AsyncConnectionPool

logger = logging.getLogger(__name__)


class PoolLifespanMiddleware:
    """Open the pool before serving and drain it on shutdown.

    With ``wait=True`` startup blocks until ``min_size`` connections are up,
    so a misconfigured database fails the boot instead of the first request.
    """

    def __init__(self, pool: AsyncConnectionPool, wait: bool = False, timeout: float = 30.0) -> None:
        self._pool = pool
        self._wait = wait
        self._timeout = timeout

    async def process_startup(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.open(wait=self._wait, timeout=self._timeout)
        logger.info("connection pool opened (min=%s max=%s)", self._pool.min_size, self._pool.max_size)

    async def process_shutdown(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.close()
        logger.info("connection pool closed")
