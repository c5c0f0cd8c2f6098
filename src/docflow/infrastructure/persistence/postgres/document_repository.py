"""PostgreSQL document repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection, errors
from psycopg.types.json import Jsonb

from docflow.domain.entities import Document
from docflow.domain.exceptions import NotFound
from docflow.domain.value_objects import DocumentStatus

_COLUMNS = (
    "id, template_id, sequence_id, number, title, status, payload, "
    "issued_at, signed_at, archived_at, created_at, updated_at"
)


def _row_to_document(r: tuple) -> Document:
    return Document(
        id=r[0],
        template_id=r[1],
        sequence_id=r[2],
        number=r[3],
        title=r[4],
        status=DocumentStatus(r[5]),
        payload=r[6] if r[6] is not None else {},
        issued_at=r[7],
        signed_at=r[8],
        archived_at=r[9],
        created_at=r[10],
        updated_at=r[11],
    )


def _build_list_query(status: DocumentStatus | None, limit: int) -> tuple[str, tuple]:
    """Build the list query and its params, newest first."""
    params: list[object] = []
    where = ""
    if status is not None:
        where = " WHERE status = %s"
        params.append(status.value)
    params.append(limit)
    q = f"SELECT {_COLUMNS} FROM document{where} ORDER BY created_at DESC, id LIMIT %s"
    return q, tuple(params)


class PostgresDocumentRepository:
    """Document repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, document_id: UUID, *, for_update: bool = False) -> Document | None:
        """Get document by id, optionally row-locking it."""
        q = f"SELECT {_COLUMNS} FROM document WHERE id = %s"
        if for_update:
            q += " FOR UPDATE"
        cur = await self._conn.execute(q, (document_id,))
        r = await cur.fetchone()
        return _row_to_document(r) if r else None

    async def list(
        self,
        *,
        status: DocumentStatus | None = None,
        limit: int = 50,
    ) -> list[Document]:
        """List documents newest first."""
        q, params = _build_list_query(status, limit)
        cur = await self._conn.execute(q, params)
        rows = await cur.fetchall()
        return [_row_to_document(r) for r in rows]

    async def create(self, document: Document) -> Document:
        """Create document; an unknown template surfaces as NotFound."""
        try:
            await self._insert(document)
        except errors.ForeignKeyViolation as e:
            if not (e.diag.constraint_name or "").startswith("document_template_id"):
                raise
            raise NotFound("Template", str(document.template_id)) from e
        return document

    async def _insert(self, document: Document) -> None:
        await self._conn.execute(
            f"INSERT INTO document ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                document.id,
                document.template_id,
                document.sequence_id,
                document.number,
                document.title,
                document.status.value,
                Jsonb(document.payload),
                document.issued_at,
                document.signed_at,
                document.archived_at,
                document.created_at,
                document.updated_at,
            ),
        )

    async def update(self, document: Document) -> Document:
        """Update mutable fields and status timestamps."""
        await self._conn.execute(
            "UPDATE document SET title=%s, status=%s, payload=%s, issued_at=%s, "
            "signed_at=%s, archived_at=%s, updated_at=%s WHERE id=%s",
            (
                document.title,
                document.status.value,
                Jsonb(document.payload),
                document.issued_at,
                document.signed_at,
                document.archived_at,
                document.updated_at,
                document.id,
            ),
        )
        return document
