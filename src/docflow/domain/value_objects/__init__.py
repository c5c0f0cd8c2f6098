"""Domain value objects."""

from docflow.domain.value_objects.document_number import DocumentNumber
from docflow.domain.value_objects.document_status import DocumentStatus
from docflow.domain.value_objects.patch import UNSET, Unset, is_set
from docflow.domain.value_objects.signer_status import SignerStatus

__all__ = [
    "DocumentNumber",
    "DocumentStatus",
    "SignerStatus",
    "UNSET",
    "Unset",
    "is_set",
]
