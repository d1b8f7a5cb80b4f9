"""
Dependency injection setup for the document store and services.

The document store and telemetry service are built once during application
startup and kept on app.state; request handlers resolve them from there.
"""

from typing import Annotated
from fastapi import Depends, Request

from config.config import Settings
from repositories.base import BaseDocumentStore
from repositories.elasticsearch_repository import create_elasticsearch_document_store
from repositories.memory_repository import InMemoryDocumentStore
from services.telemetry_service import TelemetryService
from common.exceptions import DocumentStoreInitializationException
from common.logging import get_logger

logger = get_logger("dependencies")


def create_document_store(settings: Settings) -> BaseDocumentStore:
    """Build the configured document store backend."""
    backend = settings.document_store_backend
    if backend == "elasticsearch":
        return create_elasticsearch_document_store(settings)
    if backend == "memory":
        logger.warning("Using in-memory document store; submissions are not persisted")
        return InMemoryDocumentStore()
    raise DocumentStoreInitializationException(
        detail=f"Unknown document store backend '{backend}'",
        backend=backend,
    )


def get_telemetry_service(request: Request) -> TelemetryService:
    """Get the shared TelemetryService."""
    return request.app.state.telemetry_service


# Dependency annotations for FastAPI
TelemetryServiceDep = Annotated[TelemetryService, Depends(get_telemetry_service)]
