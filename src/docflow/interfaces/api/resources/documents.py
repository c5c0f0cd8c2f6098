"""Document API resources."""

from datetime import datetime
from uuid import UUID

import falcon.asgi

from docflow.application.dto.document_dto import (
    DocumentCreateInput,
    DocumentListFilter,
    DocumentOutput,
    DocumentUpdateInput,
    SignerStatusInput,
)
from docflow.application.use_cases.document.create_document import CreateDocumentUseCase
from docflow.application.use_cases.document.get_document import GetDocumentUseCase
from docflow.application.use_cases.document.list_documents import ListDocumentsUseCase
from docflow.application.use_cases.document.update_document import UpdateDocumentUseCase
from docflow.domain.exceptions import NotFound, StorageError, ValidationError
from docflow.domain.value_objects import UNSET


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _document_to_dict(doc: DocumentOutput) -> dict:
    return {
        "id": str(doc.id),
        "templateId": str(doc.template_id),
        "sequenceId": str(doc.sequence_id),
        "number": doc.number,
        "title": doc.title,
        "status": doc.status,
        "payload": doc.payload,
        "issuedAt": _iso(doc.issued_at),
        "signedAt": _iso(doc.signed_at),
        "archivedAt": _iso(doc.archived_at),
        "createdAt": _iso(doc.created_at),
        "updatedAt": _iso(doc.updated_at),
        "signers": [
            {
                "id": str(s.id),
                "signerId": str(s.signer_id),
                "fullName": s.full_name,
                "email": s.email,
                "status": s.status,
                "orderNo": s.order_no,
                "signedAt": _iso(s.signed_at),
            }
            for s in doc.signers
        ],
    }


def _set_error(resp: falcon.asgi.Response, ex: Exception) -> None:
    """Map domain errors to HTTP status and body."""
    if isinstance(ex, ValidationError):
        resp.status = falcon.HTTP_400
    elif isinstance(ex, NotFound):
        resp.status = falcon.HTTP_404
    elif isinstance(ex, TimeoutError):
        resp.status = falcon.HTTP_504
        resp.media = {"error": "Transaction deadline exceeded"}
        return
    else:
        resp.status = falcon.HTTP_500
        resp.media = {"error": "Internal error"}
        return
    resp.media = {"error": str(ex), "kind": ex.kind.value}


async def _read_object(req: falcon.asgi.Request) -> dict:
    body = await req.get_media()
    if not isinstance(body, dict):
        raise ValidationError("request body must be a JSON object")
    return body


def _field_or_unset(body: dict, key: str) -> object:
    """Absent and null both leave the field untouched."""
    value = body.get(key)
    return UNSET if value is None else value


class DocumentsResource:
    """GET/POST /v1/documents - list and issue documents."""

    def __init__(
        self,
        create_document: CreateDocumentUseCase,
        list_documents: ListDocumentsUseCase,
    ) -> None:
        self._create_document = create_document
        self._list_documents = list_documents

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List documents, newest first. Query: status, limit."""
        try:
            items = await self._list_documents.execute(
                DocumentListFilter(
                    status=req.get_param("status"),
                    limit=req.get_param_as_int("limit"),
                )
            )
        except (ValidationError, StorageError, TimeoutError) as e:
            _set_error(resp, e)
            return
        resp.media = {"items": [_document_to_dict(d) for d in items]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Issue a document with its signer roster."""
        try:
            body = await _read_object(req)
            signer_ids = body.get("signerIds") or []
            if not isinstance(signer_ids, list):
                raise ValidationError("signerIds must be a list")
            result = await self._create_document.execute(
                DocumentCreateInput(
                    template_id=body.get("templateId", ""),
                    sequence_code=body.get("sequenceCode", ""),
                    title=body.get("title", ""),
                    payload=body.get("payload"),
                    signer_ids=signer_ids,
                    status=body.get("status"),
                )
            )
        except (ValidationError, NotFound, StorageError, TimeoutError) as e:
            _set_error(resp, e)
            return
        resp.media = _document_to_dict(result)
        resp.status = falcon.HTTP_201


class DocumentResource:
    """GET/PATCH /v1/documents/{document_id}."""

    def __init__(
        self,
        get_document: GetDocumentUseCase,
        update_document: UpdateDocumentUseCase,
    ) -> None:
        self._get_document = get_document
        self._update_document = update_document

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        document_id: str,
    ) -> None:
        """Get document aggregate."""
        try:
            doc_id = UUID(document_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid UUID"}
            return
        try:
            result = await self._get_document.execute(doc_id)
        except (NotFound, StorageError, TimeoutError) as e:
            _set_error(resp, e)
            return
        resp.media = _document_to_dict(result)
        resp.status = falcon.HTTP_200

    async def on_patch(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        document_id: str,
    ) -> None:
        """Sparse update: title, status, payload, signer statuses."""
        try:
            doc_id = UUID(document_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid UUID"}
            return
        try:
            body = await _read_object(req)
            raw_signers = body.get("signerStatuses") or []
            if not isinstance(raw_signers, list) or not all(
                isinstance(item, dict) for item in raw_signers
            ):
                raise ValidationError("signerStatuses must be a list of objects")
            patch = DocumentUpdateInput(
                title=_field_or_unset(body, "title"),
                status=_field_or_unset(body, "status"),
                payload=body["payload"] if "payload" in body else UNSET,
                signer_statuses=[
                    SignerStatusInput(
                        signer_id=item.get("signerId", ""),
                        status=item.get("status", ""),
                    )
                    for item in raw_signers
                ],
            )
            result = await self._update_document.execute(doc_id, patch)
        except (ValidationError, NotFound, StorageError, TimeoutError) as e:
            _set_error(resp, e)
            return
        resp.media = _document_to_dict(result)
        resp.status = falcon.HTTP_200
