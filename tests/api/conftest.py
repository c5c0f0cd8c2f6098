"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from docflow.application.use_cases.document.create_document import CreateDocumentUseCase
from docflow.application.use_cases.document.get_document import GetDocumentUseCase
from docflow.application.use_cases.document.list_documents import ListDocumentsUseCase
from docflow.application.use_cases.document.update_document import UpdateDocumentUseCase
from docflow.interfaces.api.app import create_app
from docflow.interfaces.api.resources.documents import DocumentResource, DocumentsResource
from docflow.interfaces.api.resources.health import HealthResource


@pytest.fixture
def app(uow_factory, allocator, clock):
    """Falcon ASGI app wired to the in-memory database."""
    create_document = CreateDocumentUseCase(
        unit_of_work_factory=uow_factory,
        sequence_allocator=allocator,
        clock=clock,
    )
    update_document = UpdateDocumentUseCase(unit_of_work_factory=uow_factory, clock=clock)
    get_document = GetDocumentUseCase(unit_of_work_factory=uow_factory)
    list_documents = ListDocumentsUseCase(unit_of_work_factory=uow_factory)
    return create_app(
        documents_resource=DocumentsResource(create_document, list_documents),
        document_resource=DocumentResource(get_document, update_document),
        health_resource=HealthResource(),
    )


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)
