"""
Plain-text response helpers.

Telemetry clients only look at the status code and a short text body,
so all responses are text/plain.
"""

from typing import Optional
from fastapi import status
from fastapi.responses import PlainTextResponse

from common.logging import request_id_var

OK_MESSAGE = "ok"


def _with_request_id(response: PlainTextResponse) -> PlainTextResponse:
    request_id = request_id_var.get()
    if request_id:
        response.headers["X-Request-ID"] = request_id
    return response


def create_success_response(message: str = OK_MESSAGE) -> PlainTextResponse:
    """Create a successful text response."""
    return _with_request_id(PlainTextResponse(content=message, status_code=status.HTTP_200_OK))


def create_error_response(
    message: str,
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    error_code: Optional[str] = None
) -> PlainTextResponse:
    """Create an error text response."""
    response = PlainTextResponse(content=message, status_code=status_code)
    if error_code:
        response.headers["X-Error-Code"] = error_code
    return _with_request_id(response)
