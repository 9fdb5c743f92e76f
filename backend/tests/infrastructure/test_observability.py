"""Structured Logging — JSONFormatter output and setup idempotence."""

import json
import logging

from user_api.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "user_api.test", logging.WARNING, __file__, 1, "POST failed: %s", ("invalid email",), None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_core_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "WARNING"
    assert log["logger"] == "user_api.test"
    assert log["message"] == "POST failed: invalid email"
    assert "timestamp" in log


def test_json_formatter_surfaces_known_extras_only():
    log = json.loads(JSONFormatter().format(
        _record(http_method="POST", error_code="INVALID_EMAIL", status_code=400, secret="x"),
    ))
    assert log["http_method"] == "POST"
    assert log["error_code"] == "INVALID_EMAIL"
    assert log["status_code"] == 400
    assert "secret" not in log


def test_setup_logging_is_idempotent():
    first = setup_logging("DEBUG", "json")
    second = setup_logging("INFO", "text")
    try:
        assert first not in logging.root.handlers
        assert second in logging.root.handlers
        assert logging.root.level == logging.INFO
        assert not isinstance(second.formatter, JSONFormatter)
    finally:
        logging.root.removeHandler(second)
