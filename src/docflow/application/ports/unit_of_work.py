"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from docflow.application.ports.repositories.document_repository import DocumentRepository
from docflow.application.ports.repositories.document_signer_repository import (
    DocumentSignerRepository,
)
from docflow.application.ports.repositories.sequence_repository import (
    SequenceRepository,
)
from docflow.application.ports.repositories.signer_repository import SignerRepository


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def sequences(self) -> SequenceRepository: ...

    @property
    def documents(self) -> DocumentRepository: ...

    @property
    def document_signers(self) -> DocumentSignerRepository: ...

    @property
    def signers(self) -> SignerRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances.

    Used as ``async with factory() as uow``: commits when the block exits
    normally, rolls back on any exception, cancellation or timeout.
    """

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
