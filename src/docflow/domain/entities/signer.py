"""Signer master record (read-only here)."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class Signer:
    """Person who can be put on a document roster."""

    id: UUID
    code: str
    full_name: str
    email: str = ""
