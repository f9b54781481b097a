"""HTTP client handle owned by one service instance.

Purpose:
    A service that talks to a daemon directly (Ollama) holds one
    :class:`ServiceHttpClient`. The underlying ``httpx.Client`` is created on
    first use, reused for every call the service makes, and closed with the
    service. Nothing is shared between service instances.

External dependencies:
    - ``httpx`` for the synchronous HTTP client.
"""

from __future__ import annotations

import threading
from typing import Optional

import httpx

from ...config.defaults import HTTP_DEFAULT_TIMEOUT


class ServiceHttpClient:
    """Lazily created ``httpx.Client`` bound to one base URL.

    Parameters:
        base_url: Absolute base URL; requests made on the client may be relative.
        timeout: Seconds; ``None`` uses ``HTTP_DEFAULT_TIMEOUT``.

    Thread-safety:
        ``get`` may be called concurrently; creation is guarded by a lock. A
        closed client is replaced on the next ``get``.
    """

    def __init__(self, base_url: str, timeout: Optional[float] = None) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = float(timeout or HTTP_DEFAULT_TIMEOUT)
        self._client: Optional[httpx.Client] = None
        self._lock = threading.Lock()

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> float:
        return self._timeout

    def get(self) -> httpx.Client:
        client = self._client
        if client is not None and not client.is_closed:
            return client
        with self._lock:
            if self._client is None or self._client.is_closed:
                self._client = httpx.Client(base_url=self._base_url, timeout=self._timeout)
            return self._client

    def close(self) -> None:
        """Close the underlying client if one was created."""
        with self._lock:
            client, self._client = self._client, None
        if client is not None:
            client.close()


__all__ = ["ServiceHttpClient"]
