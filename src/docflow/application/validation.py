"""Input normalization and validation.

Everything here runs before a unit of work is opened, so a rejected request
never touches storage.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from docflow.application.dto.document_dto import (
    DocumentCreateInput,
    DocumentListFilter,
    DocumentUpdateInput,
)
from docflow.domain.exceptions import ValidationError
from docflow.domain.services.document_lifecycle import (
    DEFAULT_INITIAL_STATUS,
    parse_document_status,
)
from docflow.domain.services.signer_roster import parse_signer_status
from docflow.domain.value_objects import UNSET, DocumentStatus, SignerStatus, Unset, is_set

DEFAULT_LIST_LIMIT = 50
MAX_LIST_LIMIT = 100


@dataclass
class CreateCommand:
    template_id: UUID
    sequence_code: str
    title: str
    payload: dict[str, Any]
    signer_ids: list[UUID]
    status: DocumentStatus


@dataclass
class UpdateCommand:
    title: str | Unset = UNSET
    payload: dict[str, Any] | Unset = UNSET
    status: DocumentStatus | Unset = UNSET
    signer_statuses: list[tuple[UUID, SignerStatus]] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (
            is_set(self.title) or is_set(self.payload) or is_set(self.status) or self.signer_statuses
        )


def parse_uuid(value: object, field_name: str) -> UUID:
    if isinstance(value, UUID):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    try:
        return UUID(value.strip())
    except ValueError as e:
        raise ValidationError(f"invalid {field_name} {value!r}") from e


def _has_nul(value: Any) -> bool:
    if isinstance(value, str):
        return "\x00" in value
    if isinstance(value, dict):
        return any(_has_nul(k) or _has_nul(v) for k, v in value.items())
    if isinstance(value, list):
        return any(_has_nul(v) for v in value)
    return False


def _reject_constant(name: str) -> Any:
    raise ValidationError(f"payload must be valid json: {name} is not allowed")


def parse_payload(value: Any) -> dict[str, Any]:
    """Accept JSON text, bytes or a mapping; empty means ``{}``.

    Only strict JSON passes: ``NaN`` and ``Infinity`` are rejected, as is any
    NUL character, since a ``jsonb`` column refuses both.
    """
    if value is None:
        return {}
    if isinstance(value, bytes | bytearray):
        try:
            value = value.decode("utf-8", errors="strict")
        except UnicodeDecodeError as e:
            raise ValidationError(f"payload must be utf-8 encoded: {e.reason}") from e
    if isinstance(value, str):
        if not value.strip():
            return {}
        try:
            decoded = json.loads(value, parse_constant=_reject_constant)
        except json.JSONDecodeError as e:
            raise ValidationError(f"payload must be valid json: {e.msg}") from e
    elif isinstance(value, Mapping):
        try:
            decoded = json.loads(json.dumps(dict(value), allow_nan=False))
        except (TypeError, ValueError) as e:
            raise ValidationError(f"payload must be valid json: {e}") from e
    else:
        raise ValidationError("payload must be a JSON object")
    if not isinstance(decoded, dict):
        raise ValidationError("payload must be a JSON object")
    if _has_nul(decoded):
        raise ValidationError("payload must not contain NUL characters")
    return decoded


def _required_text(value: object, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def validate_create(data: DocumentCreateInput) -> CreateCommand:
    template_id = parse_uuid(data.template_id, "templateId")
    sequence_code = _required_text(data.sequence_code, "sequenceCode").upper()
    title = _required_text(data.title, "title")
    payload = parse_payload(data.payload)

    if data.status is None or (isinstance(data.status, str) and not data.status.strip()):
        status = DEFAULT_INITIAL_STATUS
    else:
        status = parse_document_status(data.status)

    signer_ids: list[UUID] = []
    for raw in data.signer_ids or []:
        if isinstance(raw, str) and not raw.strip():
            continue
        signer_id = parse_uuid(raw, "signerId")
        if signer_id in signer_ids:
            raise ValidationError(f"duplicate signerId {raw!r}")
        signer_ids.append(signer_id)

    return CreateCommand(
        template_id=template_id,
        sequence_code=sequence_code,
        title=title,
        payload=payload,
        signer_ids=signer_ids,
        status=status,
    )


def validate_update(data: DocumentUpdateInput) -> UpdateCommand:
    command = UpdateCommand()
    if is_set(data.title):
        if not isinstance(data.title, str) or not data.title.strip():
            raise ValidationError("title cannot be empty")
        command.title = data.title.strip()
    if is_set(data.payload):
        command.payload = parse_payload(data.payload)
    if is_set(data.status):
        command.status = parse_document_status(data.status)
    for item in data.signer_statuses or []:
        command.signer_statuses.append(
            (parse_uuid(item.signer_id, "signerId"), parse_signer_status(item.status))
        )
    return command


def normalize_list_filter(data: DocumentListFilter) -> tuple[DocumentStatus | None, int]:
    status = None
    if data.status is not None and data.status.strip():
        status = parse_document_status(data.status)
    limit = data.limit
    if limit is None or limit <= 0 or limit > MAX_LIST_LIMIT:
        limit = DEFAULT_LIST_LIMIT
    return status, limit
