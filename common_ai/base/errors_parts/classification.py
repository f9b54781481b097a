"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

Implements HTTP status extraction, status-to-code mapping, and message-based
heuristics as a fallback so failures from any vendor SDK or HTTP client can be
surfaced as a :class:`TransportError` with a meaningful code.
"""
from __future__ import annotations

import asyncio
from typing import Dict, Optional, Tuple

from .error_code import ErrorCode
from .provider_error import ProviderError
from .transport_error import TransportError


def _valid_status(value: object) -> Optional[int]:
    return value if isinstance(value, int) and 100 <= value < 600 else None


def _extract_status(exc: BaseException) -> Optional[int]:
    """Return the HTTP status carried by ``exc``, if any.

    openai errors expose ``status_code``, google-api-core errors ``code`` and
    httpx ``HTTPStatusError`` only ``response.status_code``.
    """
    candidates = [getattr(exc, attr, None) for attr in ("status_code", "status", "code")]
    candidates.append(getattr(getattr(exc, "response", None), "status_code", None))
    for value in candidates:
        status = _valid_status(value)
        if status is not None:
            return status
    return None


_STATUS_GROUPS: Dict[ErrorCode, Tuple[int, ...]] = {
    ErrorCode.VALIDATION: (400, 422),
    ErrorCode.AUTH: (401, 403),
    ErrorCode.NOT_FOUND: (404,),
    ErrorCode.TIMEOUT: (408, 504),
    ErrorCode.CONFLICT: (409,),
    ErrorCode.RATE_LIMIT: (429,),
    ErrorCode.SERVER_ERROR: (500,),
    ErrorCode.TRANSIENT: (502,),
    ErrorCode.UNAVAILABLE: (503,),
}

_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    status: code for code, statuses in _STATUS_GROUPS.items() for status in statuses
}


_PATTERN_GROUPS = (
    (ErrorCode.TIMEOUT, ("timeout", "timed out")),
    (ErrorCode.AUTH, ("auth", "api key", "unauthorized", "forbidden")),
    (ErrorCode.UNSUPPORTED, ("unsupported", "not supported")),
    (ErrorCode.NOT_FOUND, ("not found", "does not exist")),
    (ErrorCode.CONFLICT, ("conflict", "already exists")),
    (ErrorCode.UNAVAILABLE, ("unavailable", "temporarily down")),
    (ErrorCode.VALIDATION, ("validation", "invalid", "malformed")),
    (ErrorCode.SERVER_ERROR, ("server error", "internal error")),
)


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:
    """Substring heuristic mapping for exceptions without an HTTP status."""
    if "rate" in msg and "limit" in msg:
        return ErrorCode.RATE_LIMIT
    for code, patterns in _PATTERN_GROUPS:
        if any(p in msg for p in patterns):
            return code
    return None


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. Timeout exceptions (sync/async).
        3. HTTP status mapping.
        4. Substring heuristics.
        5. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError)):
        return ErrorCode.TIMEOUT
    status = _extract_status(exc)
    if status is not None and status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    code = _heuristic_from_message(str(exc).lower())
    return code if code is not None else ErrorCode.UNKNOWN


def wrap_transport_error(exc: BaseException, *, provider: str, model: Optional[str] = None) -> ProviderError:
    """Return ``exc`` unchanged if already a ProviderError, else a TransportError.

    The returned error carries ``exc`` as ``raw``; callers raise it with
    ``from exc`` to keep the chain.
    """
    if isinstance(exc, ProviderError):
        return exc
    return TransportError(
        message=str(exc) or exc.__class__.__name__,
        provider=provider,
        model=model,
        code=classify_exception(exc),
        raw=exc,
    )


__all__ = [
    "classify_exception",
    "wrap_transport_error",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]
