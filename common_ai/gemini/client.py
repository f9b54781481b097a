"""Gemini service adapter.

Uses the google-generativeai SDK (``GenerativeModel.generate_content``).
Reconciled instructions become ``system_instruction``; prompt/response
history and the trailing prompt become ``contents``. Streaming passes
``stream=True`` and accumulates chunk text.
"""

from __future__ import annotations

import threading
from itertools import islice
from typing import Any, List, Optional, Sequence, Tuple

import google.generativeai as genai

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
    to_gemini_contents,
    translate_chunk,
)

__all__ = ["GeminiService", "GeminiModel"]


class GeminiModel(Model, SupportsStreaming):
    """A Gemini model; a ``GenerativeModel`` is built per call."""

    def __init__(self, name: str, service: "GeminiService") -> None:
        self._name = name
        self._service = service
        self._logger = get_logger("common_ai.gemini")

    @property
    def name(self) -> str:
        return self._name

    @property
    def provider_name(self) -> str:
        return PROVIDER_NAME

    def _prepare(self, contents: Sequence[Content]) -> Tuple[Any, List[dict]]:
        context = build_prompt_context(contents, provider=PROVIDER_NAME, model=self._name)
        self._service.configure()
        gen_model = genai.GenerativeModel(
            model_name=self._name,
            system_instruction=context.transcript.instructions,
        )
        return gen_model, to_gemini_contents(context)

    def complete(self, contents: Sequence[Content]) -> Completion:
        contents = list(contents)

        def _call() -> Completion:
            gen_model, payload = self._prepare(contents)
            return decode_completion(gen_model.generate_content(payload), self._name)

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
            gen_model, payload = self._prepare(contents)
            return gen_model.generate_content(payload, stream=True)

        return normalize_stream(
            _starter,
            translate_chunk,
            mode="delta",
            on_complete=on_complete,
            provider=PROVIDER_NAME,
            model=self._name,
        )

    def start_chat(self, history: Optional[Sequence[Content]] = None) -> HistoryChat:
        return HistoryChat(self, history)


class GeminiService(Service):
    """Entry point for Gemini models.

    Args:
        api_key: Explicit key; falls back to ``GEMINI_API_KEY`` then
            ``GOOGLE_API_KEY``.
    """

    def __init__(self, api_key: Optional[str] = None) -> None:
        cfg = get_provider_config(PROVIDER_NAME, {"api_key": api_key})
        self._api_key: Optional[str] = cfg.get("api_key")
        self._default_model: str = cfg["model"]
        self._configured = False
        self._lock = threading.Lock()
        self._logger = get_logger("common_ai.gemini")

    @property
    def provider_name(self) -> str:
        return PROVIDER_NAME

    @property
    def api_key(self) -> Optional[str]:
        return self._api_key

    @property
    def default_model(self) -> str:
        return self._default_model

    def configure(self) -> None:
        """Hand the credential to the SDK once, before the first call."""
        if self._configured:
            return
        with self._lock:
            if not self._configured and self._api_key:
                genai.configure(api_key=self._api_key)
            self._configured = True

    def model(self, name: Optional[str] = None) -> GeminiModel:
        return GeminiModel(name or self._default_model, self)

    def list_models(self, page_size: Optional[int] = None) -> List[ModelInfo]:
        ctx = LogContext(provider=PROVIDER_NAME)

        def _call() -> List[ModelInfo]:
            self.configure()
            if page_size is None:
                return [decode_model_info(m) for m in genai.list_models()]
            if page_size <= 0:
                return []
            listing = genai.list_models(page_size=page_size)
            return [decode_model_info(m) for m in islice(listing, page_size)]

        models = invoke_backend(
            _call,
            logger=self._logger,
            ctx=ctx,
            event="models.list",
            provider=PROVIDER_NAME,
        )
        log_event(self._logger, "models.list", ctx, count=len(models), page_size=page_size)
        return models
