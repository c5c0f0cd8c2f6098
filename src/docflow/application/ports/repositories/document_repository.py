"""Document repository port."""

from typing import Protocol
from uuid import UUID

from docflow.domain.entities import Document
from docflow.domain.value_objects import DocumentStatus


class DocumentRepository(Protocol):
    """Port for document persistence. Returned documents carry no signers."""

    async def get_by_id(self, document_id: UUID, *, for_update: bool = False) -> Document | None: ...

    async def list(
        self,
        *,
        status: DocumentStatus | None = None,
        limit: int = 50,
    ) -> list[Document]: ...

    async def create(self, document: Document) -> Document: ...

    async def update(self, document: Document) -> Document: ...
