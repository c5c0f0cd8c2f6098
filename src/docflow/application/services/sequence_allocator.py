"""Sequence allocator - mints the next document number for a named counter."""

import logging
from dataclasses import replace

from docflow.application.ports import UnitOfWork
from docflow.domain.entities import NumberSequence
from docflow.domain.exceptions import Conflict, NotFound, StorageError
from docflow.domain.value_objects import DocumentNumber

logger = logging.getLogger(__name__)


class SequenceAllocator:
    """Allocate numbers inside the caller's unit of work.

    The sequence row stays leased until that unit of work commits or rolls
    back, so a failed create also rolls the counter back. Callers on the same
    code are serialized; different codes never contend.
    """

    def __init__(self, max_attempts: int = 5) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._max_attempts = max_attempts

    async def allocate(self, uow: UnitOfWork, code: str) -> tuple[NumberSequence, DocumentNumber]:
        """Advance the counter for ``code`` by one and format the result."""
        for attempt in range(1, self._max_attempts + 1):
            sequence = await uow.sequences.get_by_code_for_update(code)
            if sequence is None:
                raise NotFound("NumberSequence", code)

            number = DocumentNumber(
                prefix=sequence.prefix,
                padding=sequence.padding,
                value=sequence.current_value + 1,
            )
            try:
                await uow.sequences.advance(sequence.id, sequence.current_value, number.value)
            except Conflict:
                logger.debug("sequence %s moved under us, attempt %d", code, attempt)
                continue

            logger.debug("allocated %s from sequence %s", number, code)
            return replace(sequence, current_value=number.value), number

        raise StorageError(
            f"could not allocate a number from sequence {code} after {self._max_attempts} attempts"
        )
