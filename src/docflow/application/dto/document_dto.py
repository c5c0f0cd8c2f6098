"""Document DTOs."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

from docflow.domain.entities import Document, DocumentSigner
from docflow.domain.value_objects import UNSET, Unset


@dataclass
class DocumentCreateInput:
    """Input for issuing a document.

    ``payload`` may be JSON text, a mapping or ``None`` (treated as ``{}``).
    ``status`` defaults to ``issued`` when omitted.
    """

    template_id: str
    sequence_code: str
    title: str
    payload: Any = None
    signer_ids: list[str] = field(default_factory=list)
    status: str | None = None


@dataclass
class SignerStatusInput:
    """Requested status for one signer on the roster."""

    signer_id: str
    status: str


@dataclass
class DocumentUpdateInput:
    """Sparse update. Fields left as ``UNSET`` are not touched.

    An explicit ``payload=None`` (or empty string) resets the payload to ``{}``.
    """

    title: str | Unset = UNSET
    status: str | Unset = UNSET
    payload: Any = UNSET
    signer_statuses: list[SignerStatusInput] = field(default_factory=list)


@dataclass
class DocumentListFilter:
    """List filter: optional status, page size (1..100, default 50)."""

    status: str | None = None
    limit: int | None = None


@dataclass
class DocumentSignerOutput:
    """Roster row as returned to callers."""

    id: UUID
    signer_id: UUID
    full_name: str
    email: str
    status: str
    order_no: int
    signed_at: datetime | None


@dataclass
class DocumentOutput:
    """Document aggregate as returned to callers."""

    id: UUID
    template_id: UUID
    sequence_id: UUID
    number: str
    title: str
    status: str
    payload: dict[str, Any]
    issued_at: datetime | None
    signed_at: datetime | None
    archived_at: datetime | None
    created_at: datetime
    updated_at: datetime
    signers: list[DocumentSignerOutput] = field(default_factory=list)


def signer_to_output(row: DocumentSigner) -> DocumentSignerOutput:
    return DocumentSignerOutput(
        id=row.id,
        signer_id=row.signer_id,
        full_name=row.full_name,
        email=row.email,
        status=row.status.value,
        order_no=row.order_no,
        signed_at=row.signed_at,
    )


def document_to_output(document: Document) -> DocumentOutput:
    return DocumentOutput(
        id=document.id,
        template_id=document.template_id,
        sequence_id=document.sequence_id,
        number=document.number,
        title=document.title,
        status=document.status.value,
        payload=document.payload,
        issued_at=document.issued_at,
        signed_at=document.signed_at,
        archived_at=document.archived_at,
        created_at=document.created_at,
        updated_at=document.updated_at,
        signers=[
            signer_to_output(s) for s in sorted(document.signers, key=lambda s: s.order_no)
        ],
    )
