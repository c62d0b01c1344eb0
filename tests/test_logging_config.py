import json
import logging

import pytest

from app.logging_config import ContextFormatter, JSONFormatter, TEXT_FORMAT, setup_logging
from config import Settings


def _record(msg: str = "Invalid total amount", level: int = logging.ERROR, context=None) -> logging.LogRecord:
    record = logging.LogRecord("app.services.validation", level, __file__, 10, msg, None, None)
    if context is not None:
        record.context = context
    return record


def test_context_formatter_appends_pairs() -> None:
    line = ContextFormatter(TEXT_FORMAT).format(_record(context={"totalAmount": -1}))
    assert "app.services.validation - ERROR - Invalid total amount" in line
    assert line.endswith("| totalAmount=-1")


def test_context_formatter_without_context() -> None:
    line = ContextFormatter(TEXT_FORMAT).format(_record())
    assert "|" not in line


def test_json_formatter_includes_context() -> None:
    data = json.loads(JSONFormatter().format(_record(context={"orderId": "O1"})))
    assert data["service"] == "app.services.validation"
    assert data["level"] == "ERROR"
    assert data["message"] == "Invalid total amount"
    assert data["context"]["orderId"] == "O1"
    assert data["context"]["line"] == 10


@pytest.fixture
def basic_config(monkeypatch: pytest.MonkeyPatch) -> dict:
    captured = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: captured.update(kwargs))
    yield captured
    for handler in captured.get("handlers", []):
        handler.close()


def test_setup_logging_writes_error_and_combined_files(tmp_path, basic_config: dict) -> None:
    setup_logging(Settings(LOG_DIR=str(tmp_path), LOG_LEVEL="info"))

    assert basic_config["level"] == "INFO"
    assert basic_config["force"] is True
    handlers = basic_config["handlers"]

    for record in (_record("Health check endpoint called", logging.INFO), _record("Server error", context={"error": "boom"})):
        for handler in handlers[1:]:
            if record.levelno >= handler.level:
                handler.handle(record)
    for handler in handlers:
        handler.flush()

    combined = (tmp_path / "combined.log").read_text().splitlines()
    errors = (tmp_path / "error.log").read_text().splitlines()

    assert [json.loads(line)["message"] for line in combined] == ["Health check endpoint called", "Server error"]
    assert [json.loads(line)["message"] for line in errors] == ["Server error"]
    assert json.loads(errors[0])["context"]["error"] == "boom"


def test_setup_logging_console_only(basic_config: dict) -> None:
    setup_logging(Settings(LOG_DIR=None, LOG_LEVEL="WARNING"))

    assert basic_config["level"] == "WARNING"
    assert len(basic_config["handlers"]) == 1
    assert isinstance(basic_config["handlers"][0].formatter, ContextFormatter)
