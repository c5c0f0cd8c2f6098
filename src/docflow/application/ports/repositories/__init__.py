"""Repository ports."""

from docflow.application.ports.repositories.document_repository import (
    DocumentRepository,
)
from docflow.application.ports.repositories.document_signer_repository import (
    DocumentSignerRepository,
)
from docflow.application.ports.repositories.sequence_repository import (
    SequenceRepository,
)
from docflow.application.ports.repositories.signer_repository import SignerRepository

__all__ = [
    "DocumentRepository",
    "DocumentSignerRepository",
    "SequenceRepository",
    "SignerRepository",
]
