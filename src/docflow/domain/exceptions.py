"""Domain exceptions."""

from enum import StrEnum


class ErrorKind(StrEnum):
    """Discriminator callers match on instead of exception identity."""

    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"
    CONFLICT = "conflict"
    INTERNAL = "internal"


class DocflowError(Exception):
    """Base exception for docflow."""

    kind: ErrorKind = ErrorKind.INTERNAL


class NotFound(DocflowError):
    """Referenced document, sequence, signer or roster link does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str, identifier: str) -> None:
        super().__init__(f"{entity} not found: {identifier}")
        self.entity = entity
        self.identifier = identifier


class NotLinked(NotFound):
    """Signer has no roster row on the document."""

    def __init__(self, document_id: str, signer_id: str) -> None:
        super().__init__("DocumentSigner", f"{document_id}/{signer_id}")
        self.document_id = document_id
        self.signer_id = signer_id


class ValidationError(DocflowError):
    """Validation failed for input data."""

    kind = ErrorKind.INVALID_INPUT


class InvalidStatus(ValidationError):
    """Status value is outside its enumerated set."""

    def __init__(self, value: object, allowed: list[str]) -> None:
        super().__init__(f"unsupported status {value!r}, expected one of: {', '.join(allowed)}")
        self.value = value


class Conflict(DocflowError):
    """Optimistic write lost a race; retried internally."""

    kind = ErrorKind.CONFLICT


class StorageError(DocflowError):
    """Underlying storage failure unrelated to business rules."""

    kind = ErrorKind.INTERNAL
