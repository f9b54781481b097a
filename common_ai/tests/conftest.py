"""Shared fixtures for common_ai tests.

Keeps every test hermetic: credential/config environment variables are
cleared and the parsed config file cache is reset. Also provides log capture
parsed into event dicts.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List

import pytest

from common_ai.config import reset_config_cache
from common_ai.config.defaults import CONFIG_FILE_ENV_VAR
from common_ai.config.env import ENV_ALIASES
from common_ai.mock import MockService

_ENV_NAMES = {name for fields in ENV_ALIASES.values() for names in fields.values() for name in names}
_ENV_NAMES |= {
    CONFIG_FILE_ENV_VAR,
    "OPENAI_ORGANIZATION",
    "GEMINI_BASE_URL",
    "MOCK_MODEL",
}


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch):
    """Clear provider environment variables and config caches around each test."""
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture()
def log_events(caplog) -> Callable[[], List[Dict[str, Any]]]:
    """Capture ``common_ai`` structured events at DEBUG and return a parser.

    Usage: ``events = log_events()`` after exercising code; each item is the
    decoded JSON payload of one ``log_event`` call.
    """
    caplog.set_level(logging.DEBUG, logger="common_ai")

    def _parse() -> List[Dict[str, Any]]:
        out: List[Dict[str, Any]] = []
        for record in caplog.records:
            if not record.name.startswith("common_ai"):
                continue
            try:
                payload = json.loads(record.getMessage())
            except ValueError:
                continue
            if isinstance(payload, dict) and "event" in payload:
                out.append(payload)
        return out

    return _parse


@pytest.fixture()
def mock_service() -> MockService:
    """A mock service with a small response table."""
    return MockService(
        responses={
            "Hello.": "Hi there!",
            "Give three points.": "One. Two. Three.",
            "*": "default answer",
        },
        chunk_size=4,
    )
