"""Document status state machine.

The three status timestamps are never supplied by callers; they are derived
from the status a document moves into:

    draft     clears issued_at, signed_at, archived_at
    issued    sets issued_at only if unset, clears signed_at, archived_at
    signed    sets signed_at, clears archived_at
    archived  sets archived_at

No state is terminal; an archived document can be moved back to any status.
"""

from dataclasses import replace
from datetime import datetime
from typing import Any, assert_never
from uuid import UUID

from docflow.domain.entities import Document
from docflow.domain.exceptions import InvalidStatus
from docflow.domain.value_objects import DocumentStatus, Unset, is_set

DEFAULT_INITIAL_STATUS = DocumentStatus.ISSUED


def parse_document_status(value: object) -> DocumentStatus:
    """Normalize and validate a status coming from the outside."""
    if isinstance(value, DocumentStatus):
        return value
    if isinstance(value, str):
        try:
            return DocumentStatus(value.strip().lower())
        except ValueError:
            pass
    raise InvalidStatus(value, [s.value for s in DocumentStatus])


def transition(document: Document, status: DocumentStatus, now: datetime) -> Document:
    """Move ``document`` into ``status`` and apply its timestamp side effects."""
    issued_at = document.issued_at
    signed_at = document.signed_at
    archived_at = document.archived_at

    match status:
        case DocumentStatus.DRAFT:
            issued_at = signed_at = archived_at = None
        case DocumentStatus.ISSUED:
            if issued_at is None:
                issued_at = now
            signed_at = archived_at = None
        case DocumentStatus.SIGNED:
            signed_at = now
            archived_at = None
        case DocumentStatus.ARCHIVED:
            archived_at = now
        case _:
            assert_never(status)

    return replace(
        document,
        status=status,
        issued_at=issued_at,
        signed_at=signed_at,
        archived_at=archived_at,
    )


def new_document(
    *,
    document_id: UUID,
    template_id: UUID,
    sequence_id: UUID,
    number: str,
    title: str,
    payload: dict[str, Any],
    status: DocumentStatus,
    now: datetime,
) -> Document:
    """Build the initial row as if transitioning from no prior state."""
    blank = Document(
        id=document_id,
        template_id=template_id,
        sequence_id=sequence_id,
        number=number,
        title=title,
        status=status,
        payload=payload,
        created_at=now,
        updated_at=now,
    )
    return transition(blank, status, now)


def revise(
    document: Document,
    *,
    now: datetime,
    title: str | Unset,
    payload: dict[str, Any] | Unset,
    status: DocumentStatus | Unset,
) -> Document:
    """Sparse update: only fields that are set change.

    Title and payload edits leave the status timestamps alone; a status,
    even the current one, is always run through :func:`transition`.
    Returns ``document`` itself when nothing was set.
    """
    if not (is_set(title) or is_set(payload) or is_set(status)):
        return document

    revised = document
    if is_set(title):
        revised = replace(revised, title=title)
    if is_set(payload):
        revised = replace(revised, payload=payload)
    if is_set(status):
        revised = transition(revised, status, now)
    return replace(revised, updated_at=now)
