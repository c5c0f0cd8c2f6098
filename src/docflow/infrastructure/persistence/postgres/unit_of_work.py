"""PostgreSQL Unit of Work implementation."""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import psycopg
from psycopg_pool import AsyncConnectionPool

from docflow.domain.exceptions import StorageError
from docflow.infrastructure.persistence.postgres.document_repository import (
    PostgresDocumentRepository,
)
from docflow.infrastructure.persistence.postgres.document_signer_repository import (
    PostgresDocumentSignerRepository,
)
from docflow.infrastructure.persistence.postgres.sequence_repository import (
    PostgresSequenceRepository,
)
from docflow.infrastructure.persistence.postgres.signer_repository import (
    PostgresSignerRepository,
)

logger = logging.getLogger(__name__)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction.

    Row locks taken through the repositories (sequence, document, roster)
    are held until commit or rollback.
    """

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._sequences = PostgresSequenceRepository(self._conn)
        self._documents = PostgresDocumentRepository(self._conn)
        self._document_signers = PostgresDocumentSignerRepository(self._conn)
        self._signers = PostgresSignerRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def sequences(self) -> PostgresSequenceRepository:
        return self._sequences

    @property
    def documents(self) -> PostgresDocumentRepository:
        return self._documents

    @property
    def document_signers(self) -> PostgresDocumentSignerRepository:
        return self._document_signers

    @property
    def signers(self) -> PostgresSignerRepository:
        return self._signers

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool, timeout: float | None = None) -> object:
    """Create UnitOfWork factory (async context manager).

    ``timeout`` (seconds) bounds the whole transaction; when it expires the
    body is cancelled, the transaction rolled back and ``TimeoutError``
    raised. Driver errors surface as ``StorageError``.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        try:
            async with PostgresUnitOfWork(pool) as uow:
                try:
                    async with asyncio.timeout(timeout):
                        yield uow
                        await uow.commit()
                except BaseException:
                    await uow.rollback()
                    raise
        except psycopg.Error as e:
            logger.error("transaction failed", exc_info=True)
            raise StorageError(str(e)) from e

    return factory
