"""Document entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

from docflow.domain.entities.document_signer import DocumentSigner
from docflow.domain.value_objects import DocumentStatus


@dataclass
class Document:
    """Issued document. Status timestamps are derived from ``status``."""

    id: UUID
    template_id: UUID
    sequence_id: UUID
    number: str
    title: str
    status: DocumentStatus
    payload: dict[str, Any]
    created_at: datetime
    updated_at: datetime
    issued_at: datetime | None = None
    signed_at: datetime | None = None
    archived_at: datetime | None = None
    signers: list[DocumentSigner] = field(default_factory=list)
