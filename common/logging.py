"""
Logging for the telemetry collector.

One JSON object per line, tagged with the current request id. Nothing that
identifies a reporting installation (client address, user agent) is ever
written.
"""

import json
import logging
import sys
import uuid
from typing import Optional, Dict, Any
from contextvars import ContextVar
from datetime import datetime, timezone

# Set per request by RequestTrackingMiddleware
request_id_var: ContextVar[Optional[str]] = ContextVar('request_id', default=None)

_RESERVED_RECORD_FIELDS = frozenset({
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'exc_info', 'exc_text', 'stack_info',
    'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'taskName',
    'getMessage',
})


class StructuredFormatter(logging.Formatter):
    """Renders a record, its `extra` fields and the request id as one JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        request_id = request_id_var.get()
        if request_id:
            log_entry["request_id"] = request_id

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info)
            }

        # `extra=` kwargs end up as record attributes
        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_FIELDS:
                log_entry[key] = value

        return self._serialize_log_entry(log_entry)

    def _serialize_log_entry(self, log_entry: Dict[str, Any]) -> str:
        try:
            return json.dumps(log_entry, default=str, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            return f"LOG_SERIALIZATION_ERROR: {e} | Original message: {log_entry.get('message', 'N/A')}"


class RequestContextLogger:
    """Binds a request id to every record logged inside the `with` block."""

    def __init__(self, request_id: Optional[str] = None):
        self.request_id = request_id or str(uuid.uuid4())
        self._token = None

    def __enter__(self):
        self._token = request_id_var.set(self.request_id)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._token is not None:
            request_id_var.reset(self._token)
            self._token = None


def setup_logging(
    level: str = "INFO",
    format_type: str = "structured",
    log_file: Optional[str] = None
) -> None:
    """Replace the root handlers with stdout (and LOG_FILE, when set).

    format_type is "structured" for JSON lines or "simple" for plain text
    during local development.
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root_logger.setLevel(numeric_level)

    if format_type == "structured":
        formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # uvicorn's access log carries the client address
    logging.getLogger("uvicorn.access").disabled = True
    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("fastapi").setLevel(logging.WARNING)
    logging.getLogger("elastic_transport").setLevel(logging.WARNING)
    logging.getLogger("elasticsearch").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_performance(
    operation: str,
    duration_ms: float,
    success: bool = True,
    **kwargs
) -> None:
    """Timing of a store write or similar operation."""
    logger = get_logger("performance")
    logger.info(
        f"Timing: {operation}",
        extra={
            "operation": operation,
            "duration_ms": duration_ms,
            "success": success,
            **kwargs
        }
    )


def log_business_event(
    event_type: str,
    entity_type: str,
    action: str,
    details: Optional[Dict[str, Any]] = None
) -> None:
    """An accepted submission and where it went."""
    logger = get_logger("business")
    logger.info(
        f"Event: {event_type}",
        extra={
            "event_type": event_type,
            "entity_type": entity_type,
            "action": action,
            "details": details or {}
        }
    )


def log_api_request(
    method: str,
    path: str,
    status_code: int,
    duration_ms: float
) -> None:
    """Anonymous access log line."""
    logger = get_logger("api")
    logger.info(
        f"API request: {method} {path}",
        extra={
            "method": method,
            "path": path,
            "status_code": status_code,
            "duration_ms": duration_ms
        }
    )


def log_error(
    error: BaseException,
    context: Optional[Dict[str, Any]] = None
) -> None:
    """Full traceback plus error_code/context of telemetry exceptions."""
    logger = get_logger("error")

    error_context = {
        "error_type": type(error).__name__,
        "error_message": str(error),
        **(context or {})
    }

    if hasattr(error, 'context'):
        error_context["exception_context"] = error.context
    if hasattr(error, 'error_code'):
        error_context["error_code"] = error.error_code

    logger.error(
        f"{type(error).__name__}: {error}",
        extra=error_context,
        exc_info=(type(error), error, error.__traceback__)
    )
