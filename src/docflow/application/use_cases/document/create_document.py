"""Create document use case."""

import logging
from uuid import UUID, uuid4

from docflow.application.dto.document_dto import (
    DocumentCreateInput,
    DocumentOutput,
    document_to_output,
)
from docflow.application.ports import Clock, UnitOfWork, utc_now
from docflow.application.services.document_reader import read_aggregate
from docflow.application.services.sequence_allocator import SequenceAllocator
from docflow.application.validation import validate_create
from docflow.domain.entities import Signer
from docflow.domain.exceptions import NotFound
from docflow.domain.services.document_lifecycle import new_document
from docflow.domain.services.signer_roster import build_roster

logger = logging.getLogger(__name__)


class CreateDocumentUseCase:
    """Issue a document: number, row and roster in one transaction.

    Either the document, its number and its whole roster become visible
    together, or nothing does (the sequence counter included).
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        sequence_allocator: SequenceAllocator,
        clock: Clock = utc_now,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._allocator = sequence_allocator
        self._clock = clock

    async def execute(self, input_data: DocumentCreateInput) -> DocumentOutput:
        """Validate, allocate a number, insert document and roster, read back."""
        command = validate_create(input_data)

        async with self._uow_factory() as uow:
            # resolved before taking the sequence lease so it is held briefly
            signers = await self._load_signers(uow, command.signer_ids)

            sequence, number = await self._allocator.allocate(uow, command.sequence_code)
            now = self._clock()
            document = new_document(
                document_id=uuid4(),
                template_id=command.template_id,
                sequence_id=sequence.id,
                number=str(number),
                title=command.title,
                payload=command.payload,
                status=command.status,
                now=now,
            )
            await uow.documents.create(document)

            if signers:
                await uow.document_signers.create_batch(build_roster(document.id, signers, now))

            aggregate = await read_aggregate(uow, document.id)

        logger.info(
            "document issued",
            extra={"document_id": str(aggregate.id), "number": aggregate.number},
        )
        return document_to_output(aggregate)

    async def _load_signers(self, uow: UnitOfWork, signer_ids: list[UUID]) -> list[Signer]:
        """Signer master records in the requested order."""
        if not signer_ids:
            return []
        found = {s.id: s for s in await uow.signers.get_by_ids(signer_ids)}
        for signer_id in signer_ids:
            if signer_id not in found:
                raise NotFound("Signer", str(signer_id))
        return [found[signer_id] for signer_id in signer_ids]
