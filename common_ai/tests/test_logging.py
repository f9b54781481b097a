"""Structured logging helper tests."""
from __future__ import annotations

import json
import logging

from common_ai.base.log_support import JsonFormatter, LogContext
from common_ai.base.logging import ROOT_LOGGER_NAME, configure_logger, get_logger, log_event


def test_get_logger_returns_children_of_package_logger() -> None:
    assert get_logger("streaming").name == "common_ai.streaming"  # nosec B101
    assert get_logger("common_ai.chat").name == "common_ai.chat"  # nosec B101
    assert get_logger().name == ROOT_LOGGER_NAME  # nosec B101 - pytest assertion in tests


def test_log_event_merges_context_and_drops_none(caplog) -> None:
    caplog.set_level(logging.INFO, logger=ROOT_LOGGER_NAME)
    logger = get_logger("test")
    log_event(logger, "demo.event", LogContext(provider="p", extra={"mode": "delta"}), count=2, skipped=None)
    payload = json.loads(caplog.records[-1].getMessage())
    assert payload == {"event": "demo.event", "provider": "p", "mode": "delta", "count": 2}  # nosec B101


def test_log_event_respects_level(caplog) -> None:
    caplog.set_level(logging.WARNING, logger=ROOT_LOGGER_NAME)
    log_event(get_logger("test"), "quiet.event")
    assert not [r for r in caplog.records if "quiet.event" in r.getMessage()]  # nosec B101


def test_json_formatter_hoists_event_payload() -> None:
    record = logging.LogRecord("common_ai.x", logging.INFO, __file__, 1, json.dumps({"event": "e", "n": 1}), None, None)
    out = json.loads(JsonFormatter().format(record))
    assert out["event"] == "e" and out["n"] == 1 and out["level"] == "INFO"  # nosec B101
    assert "msg" not in out  # nosec B101 - pytest assertion in tests


def test_configure_logger_adds_and_removes_file_handler(tmp_path) -> None:
    path = tmp_path / "logs" / "common_ai.log"
    logger = configure_logger(level="INFO", file_path=str(path))
    try:
        log_event(get_logger("file"), "file.event")
        for h in logger.handlers:
            h.flush()
        lines = path.read_text(encoding="utf-8").splitlines()
        assert json.loads(lines[-1])["event"] == "file.event"  # nosec B101
    finally:
        configure_logger(level=logging.WARNING, file_path=None)
    assert not [h for h in logger.handlers if getattr(h, "baseFilename", None)]  # nosec B101
