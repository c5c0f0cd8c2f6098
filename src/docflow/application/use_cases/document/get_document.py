"""Get document use case."""

from uuid import UUID

from docflow.application.dto.document_dto import DocumentOutput, document_to_output
from docflow.application.services.document_reader import read_aggregate


class GetDocumentUseCase:
    """Get document aggregate by id."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, document_id: UUID) -> DocumentOutput:
        async with self._uow_factory() as uow:
            document = await read_aggregate(uow, document_id)
        return document_to_output(document)
