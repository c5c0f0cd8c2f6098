"""List documents use case."""

from docflow.application.dto.document_dto import (
    DocumentListFilter,
    DocumentOutput,
    document_to_output,
)
from docflow.application.services.document_reader import attach_signers
from docflow.application.validation import normalize_list_filter


class ListDocumentsUseCase:
    """Newest documents first, optionally filtered by status."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, list_filter: DocumentListFilter | None = None) -> list[DocumentOutput]:
        status, limit = normalize_list_filter(list_filter or DocumentListFilter())
        async with self._uow_factory() as uow:
            documents = await uow.documents.list(status=status, limit=limit)
            await attach_signers(uow, documents)
        return [document_to_output(d) for d in documents]
