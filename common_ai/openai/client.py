"""OpenAI service adapter.

Built on the official ``openai`` SDK. Conversations are reconciled into an
instructions block, alternating history and a trailing prompt, then sent as
chat-completions messages (``system`` / ``user`` / ``assistant``). Streaming
uses ``stream=True`` and accumulates the text deltas.

Credentials resolve as: explicit argument, then ``OPENAI_API_KEY`` /
``OPENAI_KEY`` / ``OPENAI_APIKEY``; the organization from ``OPENAI_ORG_ID`` /
``OPENAI_ORG`` / ``OPENAI_ORGANIZATION``. The SDK client is created on first
use, so a missing key surfaces from the first backend call.
"""

from __future__ import annotations

import threading
from itertools import islice
from typing import Any, List, Optional, Sequence

from openai import OpenAI as _OpenAIClient

from ..base.call_support import invoke_backend, invoke_complete
from ..base.chat_session import HistoryChat
from ..base.interfaces import Model, Service, SupportsStreaming
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import Completion, Content, ModelInfo
from ..base.streaming import CompletionCallback, MessageStream, normalize_stream
from ..base.transcript import build_prompt_context
from ..config import get_provider_config
from .helpers import (
    PROVIDER_NAME,
    decode_completion,
    decode_model_info,
    to_chat_messages,
    translate_delta,
)

__all__ = ["OpenAIService", "OpenAIModel"]


class OpenAIModel(Model, SupportsStreaming):
    """A chat-completions model bound to a service's SDK client."""

    def __init__(self, name: str, service: "OpenAIService") -> None:
        self._name = name
        self._service = service
        self._logger = get_logger("common_ai.openai")

    @property
    def name(self) -> str:
        return self._name

    @property
    def provider_name(self) -> str:
        return PROVIDER_NAME

    def _messages(self, contents: Sequence[Content]) -> List[dict]:
        context = build_prompt_context(contents, provider=PROVIDER_NAME, model=self._name)
        return to_chat_messages(context)

    def complete(self, contents: Sequence[Content]) -> Completion:
        contents = list(contents)

        def _call() -> Completion:
            resp = self._service.client().chat.completions.create(
                model=self._name,
                messages=self._messages(contents),
            )
            return decode_completion(resp, self._name)

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

        def _starter() -> Any:
            return self._service.client().chat.completions.create(
                model=self._name,
                messages=self._messages(contents),
                stream=True,
            )

        return normalize_stream(
            _starter,
            translate_delta,
            mode="delta",
            on_complete=on_complete,
            provider=PROVIDER_NAME,
            model=self._name,
        )

    def start_chat(self, history: Optional[Sequence[Content]] = None) -> HistoryChat:
        return HistoryChat(self, history)


class OpenAIService(Service):
    """Entry point for OpenAI models.

    Args:
        api_key: Explicit key; falls back to the environment aliases.
        organization: Explicit organization id; falls back to the environment.
        base_url: Alternate API base URL (proxies, compatible gateways).
        client: Pre-built SDK client, mainly for tests.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        organization: Optional[str] = None,
        base_url: Optional[str] = None,
        client: Any = None,
    ) -> None:
        cfg = get_provider_config(
            PROVIDER_NAME,
            {"api_key": api_key, "organization": organization, "base_url": base_url},
        )
        self._api_key: Optional[str] = cfg.get("api_key")
        self._organization: Optional[str] = cfg.get("organization")
        self._base_url: Optional[str] = cfg.get("base_url")
        self._default_model: str = cfg["model"]
        self._client = client
        self._lock = threading.Lock()
        self._logger = get_logger("common_ai.openai")

    @property
    def provider_name(self) -> str:
        return PROVIDER_NAME

    @property
    def api_key(self) -> Optional[str]:
        return self._api_key

    @property
    def organization(self) -> Optional[str]:
        return self._organization

    @property
    def default_model(self) -> str:
        return self._default_model

    def client(self) -> Any:
        """Return the SDK client, creating it on first use."""
        if self._client is None:
            with self._lock:
                if self._client is None:
                    self._client = _OpenAIClient(
                        api_key=self._api_key,
                        organization=self._organization,
                        base_url=self._base_url,
                    )
        return self._client

    def model(self, name: Optional[str] = None) -> OpenAIModel:
        return OpenAIModel(name or self._default_model, self)

    def list_models(self, page_size: Optional[int] = None) -> List[ModelInfo]:
        ctx = LogContext(provider=PROVIDER_NAME)

        def _call() -> List[ModelInfo]:
            listing = (decode_model_info(m) for m in self.client().models.list())
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
