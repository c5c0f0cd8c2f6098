"""PostgreSQL signer repository implementation (read-only)."""

from uuid import UUID

from psycopg import AsyncConnection

from docflow.domain.entities import Signer


class PostgresSignerRepository:
    """Signer master data lookups."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_ids(self, signer_ids: list[UUID]) -> list[Signer]:
        """Get signers by ids; missing ids are simply absent."""
        if not signer_ids:
            return []
        cur = await self._conn.execute(
            "SELECT id, code, full_name, COALESCE(email, '') FROM signer WHERE id = ANY(%s)",
            (signer_ids,),
        )
        rows = await cur.fetchall()
        return [Signer(id=r[0], code=r[1], full_name=r[2], email=r[3]) for r in rows]
