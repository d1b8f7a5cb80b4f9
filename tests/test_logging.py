"""Tests for structured, anonymous logging."""
import json
import logging

import pytest

from common.logging import RequestContextLogger, StructuredFormatter, request_id_var, setup_logging
from config.config import Settings


def _record(msg="hello", **extra):
    record = logging.LogRecord("api", logging.INFO, __file__, 10, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_json_with_extras():
    entry = json.loads(StructuredFormatter().format(_record(path="/v1/submit", status_code=200)))

    assert entry["message"] == "hello"
    assert entry["level"] == "INFO"
    assert entry["path"] == "/v1/submit"
    assert entry["status_code"] == 200


def test_request_id_is_attached_inside_context():
    with RequestContextLogger(request_id="req-1"):
        entry = json.loads(StructuredFormatter().format(_record()))

    assert entry["request_id"] == "req-1"
    assert request_id_var.get() is None


def test_request_context_generates_ids():
    with RequestContextLogger() as ctx:
        assert request_id_var.get() == ctx.request_id
        assert ctx.request_id


@pytest.fixture
def restore_root_handlers():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_log_file_receives_structured_lines(tmp_path, restore_root_handlers):
    log_file = tmp_path / "telemetry.log"

    setup_logging(level="INFO", format_type="structured", log_file=str(log_file))
    logging.getLogger("api").info("submitted", extra={"status_code": 200})
    for handler in logging.getLogger().handlers:
        handler.flush()

    entry = json.loads(log_file.read_text().strip().splitlines()[-1])
    assert entry["message"] == "submitted"
    assert entry["status_code"] == 200


def test_log_file_setting_is_read_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "telemetry.log"))

    assert Settings().log_file == str(tmp_path / "telemetry.log")
    assert Settings(log_file=None).log_file is None
