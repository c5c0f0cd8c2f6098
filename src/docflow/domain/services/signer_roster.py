"""Signer roster: fixed-order list of signers attached at document creation."""

from collections.abc import Sequence
from dataclasses import replace
from datetime import datetime
from typing import assert_never
from uuid import UUID, uuid4

from docflow.domain.entities import DocumentSigner, Signer
from docflow.domain.exceptions import InvalidStatus
from docflow.domain.value_objects import SignerStatus


def parse_signer_status(value: object) -> SignerStatus:
    """Normalize and validate a signer status coming from the outside."""
    if isinstance(value, SignerStatus):
        return value
    if isinstance(value, str):
        try:
            return SignerStatus(value.strip().lower())
        except ValueError:
            pass
    raise InvalidStatus(value, [s.value for s in SignerStatus])


def ensure_contiguous(rows: Sequence[DocumentSigner]) -> None:
    """Raise if order numbers are not exactly 1..N."""
    if not rows:
        raise ValueError("roster must contain at least one signer")
    order = sorted(r.order_no for r in rows)
    if order != list(range(1, len(rows) + 1)):
        raise ValueError(f"roster order numbers must be contiguous from 1, got {order}")


def build_roster(
    document_id: UUID,
    signers: Sequence[Signer],
    now: datetime,
) -> list[DocumentSigner]:
    """One pending row per signer, ``order_no`` = 1-based position."""
    if not signers:
        raise ValueError("cannot build an empty roster")
    ids = [s.id for s in signers]
    if len(set(ids)) != len(ids):
        raise ValueError("roster signers must be unique")

    rows = [
        DocumentSigner(
            id=uuid4(),
            document_id=document_id,
            signer_id=signer.id,
            full_name=signer.full_name,
            email=signer.email,
            status=SignerStatus.PENDING,
            order_no=position,
            created_at=now,
            updated_at=now,
        )
        for position, signer in enumerate(signers, start=1)
    ]
    ensure_contiguous(rows)
    return rows


def apply_signer_status(
    row: DocumentSigner,
    status: SignerStatus,
    now: datetime,
) -> DocumentSigner:
    """Set ``status`` and derive ``signed_at``.

    Declining leaves ``signed_at`` as it was, so a signer moving from signed
    to declined keeps the old timestamp.
    """
    signed_at = row.signed_at
    match status:
        case SignerStatus.SIGNED:
            signed_at = now
        case SignerStatus.PENDING:
            signed_at = None
        case SignerStatus.DECLINED:
            pass
        case _:
            assert_never(status)
    return replace(row, status=status, signed_at=signed_at, updated_at=now)
