"""Application entry point and composition root."""

import logging
import sys

import falcon
import falcon.asgi

from docflow import __version__
from docflow.application.services.sequence_allocator import SequenceAllocator
from docflow.application.use_cases.document.create_document import CreateDocumentUseCase
from docflow.application.use_cases.document.get_document import GetDocumentUseCase
from docflow.application.use_cases.document.list_documents import ListDocumentsUseCase
from docflow.application.use_cases.document.update_document import UpdateDocumentUseCase
from docflow.config import get_settings
from docflow.infrastructure.persistence.postgres.connection import (
    check_connection,
    create_pool,
)
from docflow.infrastructure.persistence.postgres.unit_of_work import (
    create_uow_factory,
)
from docflow.interfaces.api.app import create_app
from docflow.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from docflow.interfaces.api.resources.documents import DocumentResource, DocumentsResource
from docflow.interfaces.api.resources.health import HealthResource
from docflow.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    """CLI entry point."""
    print(f"docflow v{__version__}")


def create_docflow_app():
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    setup_logging(settings.log_level)

    pool = create_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )
    uow_factory = create_uow_factory(pool, timeout=settings.transaction_timeout)
    allocator = SequenceAllocator(max_attempts=settings.sequence_max_attempts)

    create_document = CreateDocumentUseCase(
        unit_of_work_factory=uow_factory,
        sequence_allocator=allocator,
    )
    update_document = UpdateDocumentUseCase(unit_of_work_factory=uow_factory)
    get_document = GetDocumentUseCase(unit_of_work_factory=uow_factory)
    list_documents = ListDocumentsUseCase(unit_of_work_factory=uow_factory)

    app = create_app(
        documents_resource=DocumentsResource(create_document, list_documents),
        document_resource=DocumentResource(get_document, update_document),
        health_resource=HealthResource(lambda: check_connection(pool)),
        middleware=[PoolLifespanMiddleware(pool, wait=settings.db_pool_open_wait)],
    )

    async def log_exception(req, resp, ex, params):
        logger.error("unhandled error on %s %s", req.method, req.path, exc_info=ex)
        resp.status = falcon.HTTP_500
        resp.media = {"title": "500 Internal Server Error"}

    app.add_error_handler(Exception, log_exception)
    logger.info("docflow v%s configured (%s)", __version__, settings.environment)
    return app


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    uvicorn.run(create_docflow_app(), host="0.0.0.0", port=8000)


if __name__ == "__main__":
    sys.exit(run_server())
