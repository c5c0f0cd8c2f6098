"""Document signer (roster) repository port."""

from typing import Protocol
from uuid import UUID

from docflow.domain.entities import DocumentSigner


class DocumentSignerRepository(Protocol):
    """Port for roster rows."""

    async def create_batch(self, rows: list[DocumentSigner]) -> list[DocumentSigner]: ...

    async def get(
        self, document_id: UUID, signer_id: UUID, *, for_update: bool = False
    ) -> DocumentSigner | None: ...

    async def list_by_documents(self, document_ids: list[UUID]) -> list[DocumentSigner]:
        """Rows for the given documents ordered by ``order_no``."""
        ...

    async def update(self, row: DocumentSigner) -> DocumentSigner: ...
