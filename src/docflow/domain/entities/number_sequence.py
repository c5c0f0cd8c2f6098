"""Number sequence entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class NumberSequence:
    """Named counter used to mint document numbers."""

    id: UUID
    code: str
    prefix: str
    padding: int
    current_value: int
    updated_at: datetime | None = None
