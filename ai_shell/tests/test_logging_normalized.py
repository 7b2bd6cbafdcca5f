"""Tests for structured logging helpers."""

from __future__ import annotations

import json
import logging
from typing import List

import pytest

from ai_shell.base.logging import (
    REQUIRED_NORMALIZED_KEYS,
    LogContext,
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)
from ai_shell.base.log_support import JsonFormatter


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture()
def captured():
    base = get_logger()
    handler = _ListHandler()
    previous = base.level
    base.addHandler(handler)
    base.setLevel(logging.DEBUG)
    yield handler
    base.removeHandler(handler)
    base.setLevel(previous)


def test_get_logger_prefixes_names():
    assert get_logger("reader").name == "ai_shell.reader"  # nosec B101 - pytest assert in tests
    assert get_logger("ai_shell.cli").name == "ai_shell.cli"  # nosec B101 - pytest assert in tests
    assert get_logger().propagate is False  # nosec B101 - pytest assert in tests


def test_normalized_event_has_required_keys(captured):
    logger = get_logger("tests.normalized")
    ctx = LogContext(provider="openai", model="gpt-4o-mini")
    normalized_log_event(logger, "stream.open", ctx, phase="start", attempt=1, emitted=False, chars=3)
    payload = json.loads(captured.records[-1].getMessage())
    for key in REQUIRED_NORMALIZED_KEYS:
        if key == "error_code":
            continue
        assert key in payload  # nosec B101 - pytest assert in tests
    assert "error_code" not in payload  # nosec B101 - pytest assert in tests
    assert payload["event"] == "stream.open" and payload["provider"] == "openai"  # nosec B101 - pytest assert in tests
    assert payload["chars"] == 3 and payload["structured"] is True  # nosec B101 - pytest assert in tests


def test_log_event_drops_none_and_respects_level(captured):
    logger = get_logger("tests.plain")
    log_event(logger, "x", None, level=logging.DEBUG, kept=1, dropped=None)
    payload = json.loads(captured.records[-1].getMessage())
    assert payload == {"event": "x", "kept": 1}  # nosec B101 - pytest assert in tests
    logging.getLogger("ai_shell").setLevel(logging.ERROR)
    log_event(logger, "hidden")
    assert json.loads(captured.records[-1].getMessage())["event"] == "x"  # nosec B101 - pytest assert in tests


def test_json_formatter_hoists_event_payload():
    record = logging.LogRecord("ai_shell.t", logging.INFO, __file__, 1, json.dumps({"event": "e", "n": 2}), None, None)
    out = json.loads(JsonFormatter().format(record))
    assert out["event"] == "e" and out["n"] == 2 and "msg" not in out  # nosec B101 - pytest assert in tests


def test_configure_logger_attaches_rotating_file(tmp_path):
    path = tmp_path / "logs" / "ai-shell.log"
    logger = configure_logger(level="INFO", file_path=str(path))
    try:
        log_event(get_logger("tests.file"), "to.file", flag=True)
        for handler in logger.handlers:
            handler.flush()
        assert "to.file" in path.read_text(encoding="utf-8")  # nosec B101 - pytest assert in tests
    finally:
        configure_logger(level="WARNING", file_path=None)
