from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from config.config import Settings, settings, tags_metadata
from dependencies import create_document_store
from repositories.base import BaseDocumentStore
from services.telemetry_service import create_telemetry_service
from common.logging import setup_logging, get_logger
from common.middleware import setup_middleware
from common.exceptions import BaseTelemetryException, DocumentStoreInitializationException
from common.responses import create_error_response
from common.validation import format_request_validation_error
from api.health import router as health_router
from api.telemetry import router as telemetry_router

setup_logging(
    level=settings.log_level,
    format_type=settings.log_format,
    log_file=settings.log_file
)

logger = get_logger("main")


def create_app(
    document_store: Optional[BaseDocumentStore] = None,
    app_settings: Optional[Settings] = None,
) -> FastAPI:
    """Build the application.

    Without an explicit document_store the configured backend is created during
    startup; failing to create it aborts startup before any request is served.
    """
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store = document_store
        if store is None:
            try:
                store = create_document_store(app_settings)
            except DocumentStoreInitializationException as e:
                logger.critical(
                    "Failed to init document store",
                    extra={"backend": e.backend, "detail": e.detail}
                )
                raise

        app.state.document_store = store
        app.state.telemetry_service = create_telemetry_service(store, app_settings)
        logger.info(
            "Telemetry collector started",
            extra={
                "backend": type(store).__name__,
                "index_prefix": app_settings.telemetry_index_prefix,
                "partition_granularity": app_settings.telemetry_partition_granularity,
            }
        )
        try:
            yield
        finally:
            await store.close()

    app = FastAPI(
        title="secureCodeBox Telemetry",
        version="1.0.0",
        description="Anonymous telemetry collection for secureCodeBox operators",
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )

    setup_middleware(app)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        message = format_request_validation_error(exc)
        logger.warning("Malformed telemetry request", extra={
            "error_count": len(exc.errors()),
            "path": str(request.url.path),
            "method": request.method
        })
        return create_error_response(
            message=message,
            status_code=400,
            error_code="MALFORMED_REQUEST"
        )

    @app.exception_handler(BaseTelemetryException)
    async def telemetry_exception_handler(request: Request, exc: BaseTelemetryException):
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(f"Telemetry exception: {exc.error_code}", extra={
            "error_code": exc.error_code,
            "context": exc.context,
            "path": str(request.url.path),
            "method": request.method
        })
        return create_error_response(
            message=exc.detail,
            status_code=exc.status_code,
            error_code=exc.error_code
        )

    app.include_router(health_router)
    app.include_router(telemetry_router, prefix="/v1")

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port, access_log=False)
