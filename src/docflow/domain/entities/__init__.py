"""Domain entities."""

from docflow.domain.entities.document import Document
from docflow.domain.entities.document_signer import DocumentSigner
from docflow.domain.entities.number_sequence import NumberSequence
from docflow.domain.entities.signer import Signer

__all__ = [
    "Document",
    "DocumentSigner",
    "NumberSequence",
    "Signer",
]
