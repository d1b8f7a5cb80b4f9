"""
Middleware for error handling, logging, and request tracking.
"""
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from common.logging import RequestContextLogger, get_logger, log_api_request
from common.responses import create_error_response


class RequestTrackingMiddleware(BaseHTTPMiddleware):
    """Assigns a correlation ID to every request and writes an anonymous access log."""

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.logger = get_logger("middleware")

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        with RequestContextLogger() as ctx:
            start = time.time()
            response = await call_next(request)
            duration_ms = (time.time() - start) * 1000

            response.headers["X-Request-ID"] = ctx.request_id
            log_api_request(
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round(duration_ms, 2),
            )
            return response


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Turns unhandled exceptions into a plain-text 500."""

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.logger = get_logger("error_handler")

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            return self._handle_unexpected_error(e, request)

    def _handle_unexpected_error(self, error: Exception, request: Request) -> Response:
        self.logger.error(
            f"Unexpected error: {type(error).__name__}",
            extra={
                "error_type": type(error).__name__,
                "error_message": str(error),
                "path": str(request.url.path),
                "method": request.method
            },
            exc_info=True
        )

        # Don't expose internal error details
        return create_error_response(
            message="internal server error",
            status_code=500,
            error_code="INTERNAL_SERVER_ERROR"
        )


def setup_middleware(app) -> None:
    """Setup all middleware for the application."""
    # Last added is executed first
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(RequestTrackingMiddleware)
