"""Per-signer states on a document roster."""

from enum import StrEnum


class SignerStatus(StrEnum):
    """Signature state of one roster row."""

    PENDING = "pending"
    SIGNED = "signed"
    DECLINED = "declined"
