"""
Centralized exception classes for the telemetry collector.
Provides a hierarchy of custom exceptions with proper error codes and messages.
"""

from typing import Optional, Dict, Any
from fastapi import HTTPException, status


class BaseTelemetryException(HTTPException):
    """Base exception class for all telemetry collector errors."""

    def __init__(
        self,
        detail: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        headers: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}


# Client errors
class InvalidScanTypeException(BaseTelemetryException):
    """A submitted scan type is not part of the official allow-list."""

    def __init__(
        self,
        scan_type: str,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            detail=f"Invalid ScanType '{scan_type}'",
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="INVALID_SCAN_TYPE",
            context=context
        )
        self.scan_type = scan_type


# Server errors
class StoreUnavailableException(BaseTelemetryException):
    """Persisting a submission failed. The client only sees a generic message."""

    def __init__(
        self,
        index: Optional[str] = None,
        cause: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            detail="elasticsearch connection failed",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="STORE_UNAVAILABLE",
            context=context or {"index": index}
        )
        self.index = index
        self.cause = cause


# Document store errors (raised by repositories, translated by services)
class DocumentStoreException(Exception):
    """Writing to the document store failed."""

    def __init__(
        self,
        detail: str,
        index: Optional[str] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(detail)
        self.detail = detail
        self.index = index
        self.status_code = status_code


class DocumentStoreInitializationException(Exception):
    """The document store client could not be configured at startup."""

    def __init__(self, detail: str, backend: Optional[str] = None):
        super().__init__(detail)
        self.detail = detail
        self.backend = backend
