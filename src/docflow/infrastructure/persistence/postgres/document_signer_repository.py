"""PostgreSQL document signer (roster) repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from docflow.domain.entities import DocumentSigner
from docflow.domain.value_objects import SignerStatus

_COLUMNS = (
    "id, document_id, signer_id, full_name, email, status, order_no, "
    "signed_at, created_at, updated_at"
)


def _row_to_signer(r: tuple) -> DocumentSigner:
    return DocumentSigner(
        id=r[0],
        document_id=r[1],
        signer_id=r[2],
        full_name=r[3],
        email=r[4] or "",
        status=SignerStatus(r[5]),
        order_no=r[6],
        signed_at=r[7],
        created_at=r[8],
        updated_at=r[9],
    )


class PostgresDocumentSignerRepository:
    """Roster repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def create_batch(self, rows: list[DocumentSigner]) -> list[DocumentSigner]:
        """Insert roster rows."""
        if not rows:
            return rows
        async with self._conn.cursor() as cur:
            await cur.executemany(
                f"INSERT INTO document_signer ({_COLUMNS}) "
                "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
                [
                    (
                        r.id,
                        r.document_id,
                        r.signer_id,
                        r.full_name,
                        r.email,
                        r.status.value,
                        r.order_no,
                        r.signed_at,
                        r.created_at,
                        r.updated_at,
                    )
                    for r in rows
                ],
            )
        return rows

    async def get(
        self, document_id: UUID, signer_id: UUID, *, for_update: bool = False
    ) -> DocumentSigner | None:
        """Get the roster row linking signer to document."""
        q = f"SELECT {_COLUMNS} FROM document_signer WHERE document_id = %s AND signer_id = %s"
        if for_update:
            q += " FOR UPDATE"
        cur = await self._conn.execute(q, (document_id, signer_id))
        r = await cur.fetchone()
        return _row_to_signer(r) if r else None

    async def list_by_documents(self, document_ids: list[UUID]) -> list[DocumentSigner]:
        """Roster rows for documents ordered by order_no."""
        if not document_ids:
            return []
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM document_signer "
            "WHERE document_id = ANY(%s) ORDER BY document_id, order_no",
            (document_ids,),
        )
        rows = await cur.fetchall()
        return [_row_to_signer(r) for r in rows]

    async def update(self, row: DocumentSigner) -> DocumentSigner:
        """Update status and signed_at; order and snapshot are immutable."""
        await self._conn.execute(
            "UPDATE document_signer SET status=%s, signed_at=%s, updated_at=%s WHERE id=%s",
            (row.status.value, row.signed_at, row.updated_at, row.id),
        )
        return row
