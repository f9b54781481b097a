"""Ollama service adapter (local daemon, on-device models).

Summary:
    Talks to the Ollama daemon over HTTP with ``httpx``:
    - ``POST /api/chat`` with ``stream: false`` for completions.
    - ``POST /api/chat`` with ``stream: true`` for NDJSON delta streaming.
    - ``GET /api/tags`` for the local catalog.

Failure semantics:
    - Daemon unreachable, or model not pulled: ``ProviderUnavailableError``
      carrying the reason.
    - Other HTTP failures: ``TransportError`` classified from the status code.
    - Nothing is retried.

Host resolution: explicit ``host`` argument, then ``OLLAMA_HOST``, then
``http://localhost:11434``.
"""

from __future__ import annotations

from itertools import islice
from typing import Any, Dict, Iterator, List, Optional, Sequence

import httpx

from ..base.call_support import invoke_backend, invoke_complete
from ..base.chat_session import HistoryChat
from ..base.http import ServiceHttpClient
from ..base.interfaces import Model, Service, SupportsStreaming
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import Completion, Content, ModelInfo
from ..base.streaming import CompletionCallback, MessageStream, normalize_stream
from ..base.transcript import build_prompt_context
from ..config import get_provider_config
from .helpers import (
    CHAT_PATH,
    PROVIDER_NAME,
    TAGS_PATH,
    build_chat_payload,
    check_response,
    daemon_errors,
    decode_completion,
    decode_model_info,
    iter_ndjson,
    to_ollama_messages,
    translate_chunk,
)

__all__ = ["OllamaService", "OllamaModel"]


def _normalize_host(host: str) -> str:
    host = host.strip().rstrip("/")
    if "://" not in host:
        host = f"http://{host}"
    return host


class OllamaModel(Model, SupportsStreaming):
    """A model served by the local Ollama daemon."""

    def __init__(self, name: str, service: "OllamaService") -> None:
        self._name = name
        self._service = service
        self._logger = get_logger("common_ai.ollama")

    @property
    def name(self) -> str:
        return self._name

    @property
    def provider_name(self) -> str:
        return PROVIDER_NAME

    def _payload(self, contents: Sequence[Content], *, stream: bool) -> Dict[str, Any]:
        context = build_prompt_context(contents, provider=PROVIDER_NAME, model=self._name)
        return build_chat_payload(model=self._name, messages=to_ollama_messages(context), stream=stream)

    def complete(self, contents: Sequence[Content]) -> Completion:
        contents = list(contents)

        def _call() -> Completion:
            payload = self._payload(contents, stream=False)
            with daemon_errors(self._service.host, model=self._name):
                resp = self._service.http().post(CHAT_PATH, json=payload)
            check_response(resp, model=self._name)
            return decode_completion(resp.json(), self._name)

        return invoke_complete(
            _call,
            logger=self._logger,
            provider=PROVIDER_NAME,
            model=self._name,
            turns=len(contents),
        )

    def stream(
        self,
        contents: Sequence[Content],
        *,
        on_complete: Optional[CompletionCallback] = None,
    ) -> MessageStream:
        contents = list(contents)
        ctx = LogContext(provider=PROVIDER_NAME, model=self._name)

        def _lines() -> Iterator[Dict[str, Any]]:
            payload = self._payload(contents, stream=True)
            with daemon_errors(self._service.host, model=self._name):
                with self._service.http().stream("POST", CHAT_PATH, json=payload) as resp:
                    if resp.is_error:
                        resp.read()
                    check_response(resp, model=self._name)
                    yield from iter_ndjson(resp, logger=self._logger, ctx=ctx, model=self._name)

        return normalize_stream(
            _lines,
            translate_chunk,
            mode="delta",
            on_complete=on_complete,
            provider=PROVIDER_NAME,
            model=self._name,
        )

    def start_chat(self, history: Optional[Sequence[Content]] = None) -> HistoryChat:
        return HistoryChat(self, history)


class OllamaService(Service):
    """Entry point for models pulled into a local Ollama daemon.

    Args:
        host: Daemon base URL; falls back to ``OLLAMA_HOST`` and the default.
        timeout_seconds: HTTP timeout for this service's client.

    The service owns its ``httpx.Client``; call :meth:`close` (or use the
    service as a context manager) to release its connections.
    """

    def __init__(self, host: Optional[str] = None, timeout_seconds: Optional[float] = None) -> None:
        cfg = get_provider_config(PROVIDER_NAME, {"host": host})
        self._host = _normalize_host(cfg["host"])
        self._http = ServiceHttpClient(self._host, timeout_seconds)
        self._default_model: str = cfg["model"]
        self._logger = get_logger("common_ai.ollama")

    @property
    def provider_name(self) -> str:
        return PROVIDER_NAME

    @property
    def host(self) -> str:
        return self._host

    @property
    def default_model(self) -> str:
        return self._default_model

    def http(self) -> httpx.Client:
        """Return this service's ``httpx.Client`` bound to the daemon host."""
        return self._http.get()

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "OllamaService":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def model(self, name: Optional[str] = None) -> OllamaModel:
        return OllamaModel(name or self._default_model, self)

    def list_models(self, page_size: Optional[int] = None) -> List[ModelInfo]:
        ctx = LogContext(provider=PROVIDER_NAME)

        def _call() -> List[ModelInfo]:
            with daemon_errors(self._host):
                resp = self.http().get(TAGS_PATH)
            check_response(resp, model=None)
            entries = (resp.json() or {}).get("models") or []
            listing = (decode_model_info(e) for e in entries if isinstance(e, dict))
            if page_size is None:
                return list(listing)
            return list(islice(listing, max(page_size, 0)))

        models = invoke_backend(
            _call,
            logger=self._logger,
            ctx=ctx,
            event="models.list",
            provider=PROVIDER_NAME,
        )
        log_event(self._logger, "models.list", ctx, count=len(models), page_size=page_size)
        return models
