"""Cooperative cancellation token.

A ``CancellationToken`` lets one thread ask a running stream to stop. The
stream polls the token between upstream chunks and, once it observes the
request, closes the native transport and ends without committing history.
"""
from __future__ import annotations

from threading import Lock
from typing import Optional


class CancellationToken:
    """A thread-safe, one-shot cancellation flag with an optional reason."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._cancelled = False
        self._reason: Optional[str] = None

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._cancelled

    @property
    def reason(self) -> Optional[str]:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._reason

    def cancel(self, reason: Optional[str] = None) -> bool:
        """Request cancellation; return True only for the first request."""
        with self._lock:
            if self._cancelled:
                return False
            self._cancelled = True
            self._reason = reason
            return True

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self._cancelled}, reason={self._reason!r})"


__all__ = ["CancellationToken"]
