"""Signer master data port (read-only)."""

from typing import Protocol
from uuid import UUID

from docflow.domain.entities import Signer


class SignerRepository(Protocol):
    """Port for signer lookups."""

    async def get_by_ids(self, signer_ids: list[UUID]) -> list[Signer]: ...
