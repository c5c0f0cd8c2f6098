"""Update document use case."""

import logging
from uuid import UUID

from docflow.application.dto.document_dto import (
    DocumentOutput,
    DocumentUpdateInput,
    document_to_output,
)
from docflow.application.ports import Clock, utc_now
from docflow.application.services.document_reader import read_aggregate
from docflow.application.validation import validate_update
from docflow.domain.exceptions import NotFound, NotLinked
from docflow.domain.services.document_lifecycle import revise
from docflow.domain.services.signer_roster import apply_signer_status

logger = logging.getLogger(__name__)


class UpdateDocumentUseCase:
    """Patch document fields/status and signer statuses atomically."""

    def __init__(self, unit_of_work_factory: type, clock: Clock = utc_now) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    async def execute(self, document_id: UUID, input_data: DocumentUpdateInput) -> DocumentOutput:
        """Apply the patch; any failure leaves document and roster untouched."""
        command = validate_update(input_data)

        async with self._uow_factory() as uow:
            document = await uow.documents.get_by_id(document_id, for_update=True)
            if document is None:
                raise NotFound("Document", str(document_id))

            now = self._clock()
            revised = revise(
                document,
                now=now,
                title=command.title,
                payload=command.payload,
                status=command.status,
            )
            if revised is not document:
                await uow.documents.update(revised)

            for signer_id, status in command.signer_statuses:
                row = await uow.document_signers.get(document_id, signer_id, for_update=True)
                if row is None:
                    raise NotLinked(str(document_id), str(signer_id))
                await uow.document_signers.update(apply_signer_status(row, status, now))

            aggregate = await read_aggregate(uow, document_id)

        if not command.is_empty:
            logger.info(
                "document updated",
                extra={"document_id": str(aggregate.id), "status": aggregate.status.value},
            )
        return document_to_output(aggregate)
