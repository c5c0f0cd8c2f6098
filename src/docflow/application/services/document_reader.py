"""Aggregate reads shared by the document use cases."""

from uuid import UUID

from docflow.application.ports import UnitOfWork
from docflow.domain.entities import Document
from docflow.domain.exceptions import NotFound


async def attach_signers(uow: UnitOfWork, documents: list[Document]) -> list[Document]:
    """Fill ``signers`` on each document in one roster query."""
    if not documents:
        return documents
    by_id = {d.id: d for d in documents}
    for d in documents:
        d.signers = []
    rows = await uow.document_signers.list_by_documents(list(by_id))
    for row in rows:
        doc = by_id.get(row.document_id)
        if doc is not None:
            doc.signers.append(row)
    for d in documents:
        d.signers.sort(key=lambda s: s.order_no)
    return documents


async def read_aggregate(uow: UnitOfWork, document_id: UUID) -> Document:
    """Document plus roster ordered by ``order_no``."""
    document = await uow.documents.get_by_id(document_id)
    if document is None:
        raise NotFound("Document", str(document_id))
    await attach_signers(uow, [document])
    return document
