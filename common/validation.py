"""
Request validation utilities.
"""

from typing import AbstractSet, Iterable, List, Optional

from fastapi.exceptions import RequestValidationError

from common.exceptions import InvalidScanTypeException
from policies.scan_types import OFFICIAL_SCAN_TYPES, OTHER_SCAN_TYPE


def is_official_scan_type(scan_type: str, allowed: Optional[AbstractSet[str]] = None) -> bool:
    """Return True if scan_type may be persisted. "other" is always accepted."""
    if scan_type == OTHER_SCAN_TYPE:
        return True
    return scan_type in (OFFICIAL_SCAN_TYPES if allowed is None else allowed)


def validate_scan_types(
    scan_types: Iterable[str],
    allowed: Optional[AbstractSet[str]] = None
) -> List[str]:
    """Validate submitted scan types against the allow-list.

    Stops at the first unknown scan type and raises InvalidScanTypeException
    naming it. Returns the scan types unchanged otherwise.
    """
    validated = list(scan_types)
    for scan_type in validated:
        if not is_official_scan_type(scan_type, allowed):
            raise InvalidScanTypeException(scan_type)
    return validated


def format_request_validation_error(error: RequestValidationError) -> str:
    """Render FastAPI body validation errors as a single readable line."""
    messages = []
    for err in error.errors():
        location = ".".join(str(x) for x in err.get("loc", ()) if x != "body")
        message = err.get("msg", "invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages) or "Invalid request body"
