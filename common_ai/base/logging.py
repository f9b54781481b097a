"""Structured logging utilities for the common_ai package.

All package loggers are children of a single ``common_ai`` logger that writes
one JSON object per line to stderr. The level is read from the
``COMMON_AI_LOG_LEVEL`` environment variable (default ``WARNING`` so that
library use stays quiet unless asked).

Event payloads never include prompt or response text, only lengths.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Optional

from .log_support import JsonFormatter, LogContext

ROOT_LOGGER_NAME = "common_ai"
LEVEL_ENV_VAR = "COMMON_AI_LOG_LEVEL"

_CONSOLE_HANDLER_ATTR = "_common_ai_console_handler"
_FILE_HANDLER_ATTR = "_common_ai_file_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _parse_level(value: str | None, default: int = logging.WARNING) -> int:
    """Map a level name such as ``"debug"`` to its number; unknown names give ``default``."""
    if not value:
        return default
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else default


def _make_formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _ensure_root_logger(json_mode: bool) -> logging.Logger:
    """Initialize (once) and return the shared ``common_ai`` logger."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if any(getattr(h, _CONSOLE_HANDLER_ATTR, False) for h in logger.handlers):
        return logger
    level = _parse_level(os.getenv(LEVEL_ENV_VAR))
    logger.setLevel(level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_make_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    logger.addHandler(handler)
    return logger


def get_logger(name: str = ROOT_LOGGER_NAME, json_mode: bool = True) -> logging.Logger:
    """Return a package logger; child names propagate to the shared root."""
    root = _ensure_root_logger(json_mode=json_mode)
    if name == ROOT_LOGGER_NAME:
        return root
    if not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Reconfigure the shared logger at runtime.

    Parameters
    ----------
    level:
        Numeric level or name (e.g. ``"DEBUG"``). ``None`` keeps the current level.
    file_path:
        When provided, attach (or retarget) a rotating file handler writing to
        this path. When ``None``, any file handler added here is removed.
    json_mode:
        Use the JSON formatter (default) or a plain text formatter.

    Returns
    -------
    logging.Logger
        The configured ``common_ai`` logger.
    """
    logger = _ensure_root_logger(json_mode=json_mode)
    if level is not None:
        logger.setLevel(_parse_level(level, default=logger.level) if isinstance(level, str) else level)

    managed = [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]
    abs_path = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    for h in managed:
        if abs_path is not None and getattr(h, "baseFilename", None) == abs_path:
            h.setFormatter(_make_formatter(json_mode))
            return logger
        logger.removeHandler(h)
        with contextlib.suppress(OSError):
            h.close()
    if abs_path is None:
        return logger

    os.makedirs(os.path.dirname(abs_path), exist_ok=True)
    # 10MB x 5 backups
    fh = RotatingFileHandler(abs_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
    fh.setFormatter(_make_formatter(json_mode))
    setattr(fh, _FILE_HANDLER_ATTR, True)
    logger.addHandler(fh)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """Emit a structured log event.

    Parameters
    ----------
    logger:
        Logger obtained from :func:`get_logger`.
    event:
        Event name (e.g. ``stream.end``).
    ctx:
        Provider/model context; merged shallowly into the payload.
    level:
        Logging level for the record.
    **fields:
        Serializable key/value pairs; ``None`` values are dropped.
    """
    if not logger.isEnabledFor(level):
        return
    payload = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


__all__ = [
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "ROOT_LOGGER_NAME",
    "LEVEL_ENV_VAR",
]
