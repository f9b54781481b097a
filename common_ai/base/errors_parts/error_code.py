"""
Failure categories shared by every backend.

``ErrorCode`` values appear in ``ProviderError.code`` and in the
``error_code`` field of ``*.error`` log events, so the string values must not
change between releases.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Normalized failure category of a backend call."""

    # credential rejected or missing
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    # gateway hiccups worth retrying by the caller
    TRANSIENT = "transient"
    # capability not offered (e.g. streaming on a non-streaming model)
    UNSUPPORTED = "unsupported"
    # request rejected before or by the backend (includes a missing prompt)
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    # local daemon down or model not installed
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
