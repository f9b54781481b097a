"""
Error wrapping any failure of an underlying backend call.
"""
from __future__ import annotations

from typing import Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


class TransportError(ProviderError):
    """Network, decode, or auth failure surfaced from a backend call.

    The original exception is kept on ``raw`` and chained as ``__cause__`` by
    :func:`wrap_transport_error`.
    """

    def __init__(
        self,
        message: str,
        provider: str = "unknown",
        model: Optional[str] = None,
        code: ErrorCode = ErrorCode.UNKNOWN,
        raw: Optional[BaseException] = None,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            provider=provider,
            model=model,
            retryable=code in (ErrorCode.TRANSIENT, ErrorCode.RATE_LIMIT, ErrorCode.TIMEOUT),
            raw=raw,
        )


__all__ = ["TransportError"]
