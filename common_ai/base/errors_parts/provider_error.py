"""
Root of the ``common_ai`` error hierarchy.

Every failure surfaced by ``complete``, ``send``, ``send_stream`` or
``list_models`` is a ``ProviderError`` (or subclass) tagged with the backend
key, the model when known, and an :class:`ErrorCode`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """A backend failure normalized for callers and log events.

    ``retryable`` is advisory only; the library itself never retries. ``raw``
    keeps the backend's original exception when there was one.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    retryable: bool = False
    raw: Optional[BaseException] = None

    def __str__(self) -> str:
        where = f"{self.provider}/{self.model}" if self.model else self.provider
        return f"[{self.code.value}] {where}: {self.message}"


__all__ = ["ProviderError"]
