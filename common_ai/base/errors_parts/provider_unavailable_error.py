"""
Error raised when a backend reports that it cannot serve requests.
"""
from __future__ import annotations

from typing import Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


class ProviderUnavailableError(ProviderError):
    """The backend is not ready (e.g., local model missing or daemon down).

    Attributes:
        reason: Provider-supplied reason, preserved verbatim.
    """

    def __init__(
        self,
        reason: str,
        provider: str = "unknown",
        model: Optional[str] = None,
        raw: Optional[BaseException] = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.UNAVAILABLE,
            message=f"model unavailable: {reason}",
            provider=provider,
            model=model,
            raw=raw,
        )
        self.reason = reason


__all__ = ["ProviderUnavailableError"]
