"""Number sequence repository port."""

from typing import Protocol
from uuid import UUID

from docflow.domain.entities import NumberSequence


class SequenceRepository(Protocol):
    """Port for number sequence persistence."""

    async def get_by_code_for_update(self, code: str) -> NumberSequence | None:
        """Read the sequence and hold an exclusive lease on it until the
        enclosing transaction ends. Concurrent callers block, they do not fail."""
        ...

    async def advance(self, sequence_id: UUID, expected: int, new_value: int) -> None:
        """Compare-and-set ``current_value``; raise ``Conflict`` if it moved."""
        ...
