"""Falcon ASGI application."""

import falcon.asgi
from falcon.asgi import App

from docflow.interfaces.api.resources.documents import DocumentResource, DocumentsResource
from docflow.interfaces.api.resources.health import HealthResource


def create_app(
    documents_resource: DocumentsResource,
    document_resource: DocumentResource,
    health_resource: HealthResource,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/documents", documents_resource)
    app.add_route("/v1/documents/{document_id}", document_resource)
    return app
