"""Document signer (roster row) entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from docflow.domain.value_objects import SignerStatus


@dataclass
class DocumentSigner:
    """One signer on a document roster, with a snapshot of their contact data."""

    id: UUID
    document_id: UUID
    signer_id: UUID
    full_name: str
    email: str
    status: SignerStatus
    order_no: int
    created_at: datetime
    updated_at: datetime
    signed_at: datetime | None = None
