"""Deterministic in-process backend for offline use and tests.

Purpose
-------
Implement the ``Service`` / ``Model`` contracts without any network traffic.
Answers come from a response table keyed by the reconciled current prompt,
with ``"*"`` as the catch-all entry, so higher layers (chats, streaming,
history commit) can be exercised end to end.

Response table entries
----------------------
- ``"text"``: a plain string answer.
- ``{"text": ..., "stream": [...], "finish_reason": ...}``: explicit stream
  chunks (deltas or snapshots depending on ``stream_mode``).
- ``{"choices": [...]}``: several candidates (an empty list decodes to a
  completion without choices).

Failure injection
-----------------
``fail_with`` raises the given exception from ``complete`` and from the
stream after ``fail_after`` chunks (``0`` fails before the first chunk).
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from itertools import islice
from typing import Any, Dict, Iterator, List, Literal, Mapping, Optional, Sequence, Union

from ..base.call_support import invoke_complete
from ..base.chat_session import HistoryChat
from ..base.interfaces import Model, Service, SupportsStreaming
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import Choice, Completion, Content, Message, ModelInfo, Role, Usage
from ..base.streaming import CompletionCallback, MessageStream, normalize_stream
from ..base.transcript import PromptContext, build_prompt_context
from ..config import get_provider_config

__all__ = ["MockService", "MockModel", "MockResponse", "DEFAULT_CATALOG"]

PROVIDER_NAME = "mock"
WILDCARD = "*"

DEFAULT_CATALOG: tuple[ModelInfo, ...] = (
    ModelInfo(name="mock-1", display_name="Mock 1", description="Deterministic test double"),
    ModelInfo(name="mock-echo", display_name="Mock Echo", description="Echoes the prompt"),
    ModelInfo(name="mock-large", display_name="Mock Large", input_token_limit=8192, output_token_limit=2048),
)

ResponseSpec = Union[str, Mapping[str, Any]]


@dataclass(frozen=True)
class MockResponse:
    """A normalized response table entry."""

    texts: List[str]
    stream: List[str] = field(default_factory=list)
    finish_reason: Optional[str] = "stop"

    @classmethod
    def parse(cls, raw: ResponseSpec) -> "MockResponse":
        if isinstance(raw, str):
            return cls(texts=[raw])
        if "choices" in raw:
            texts = [str(t) for t in raw["choices"]]
        else:
            texts = [str(raw.get("text", ""))]
        return cls(
            texts=texts,
            stream=[str(c) for c in raw.get("stream", [])],
            finish_reason=raw.get("finish_reason", "stop"),
        )

    @property
    def text(self) -> str:
        return self.texts[0] if self.texts else ""


def _chunk_text(text: str, chunk_size: int) -> List[str]:
    """Split text into fixed-size deltas."""
    if not text:
        return []
    return [text[i : i + chunk_size] for i in range(0, len(text), chunk_size)]


def _as_snapshots(deltas: Sequence[str]) -> List[str]:
    out, acc = [], ""
    for d in deltas:
        acc += d
        out.append(acc)
    return out


class MockModel(Model, SupportsStreaming):
    """A mock model; every call is recorded on the owning service."""

    def __init__(self, name: str, service: "MockService") -> None:
        self._name = name
        self._service = service
        self._logger = get_logger("common_ai.mock")

    @property
    def name(self) -> str:
        return self._name

    @property
    def provider_name(self) -> str:
        return PROVIDER_NAME

    def _context(self, contents: Sequence[Content]) -> PromptContext:
        context = build_prompt_context(contents, provider=PROVIDER_NAME, model=self._name)
        self._service.record(context)
        return context

    def _answer(self, context: PromptContext) -> MockResponse:
        if self._name == "mock-echo":
            return MockResponse(texts=[context.prompt])
        return self._service.response_for(context.prompt)

    def complete(self, contents: Sequence[Content]) -> Completion:
        contents = list(contents)

        def _call() -> Completion:
            context = self._context(contents)
            if self._service.fail_with is not None:
                raise self._service.fail_with
            answer = self._answer(context)
            choices = [
                Choice(index=i, message=Message(role=Role.MODEL, text=t), finish_reason=answer.finish_reason)
                for i, t in enumerate(answer.texts)
            ]
            prompt_tokens = sum(len(c.joined_text().split()) for c in contents)
            completion_tokens = len(answer.text.split())
            return Completion.create(
                model=self._name,
                choices=choices,
                usage=Usage(prompt_tokens, completion_tokens, prompt_tokens + completion_tokens),
                metadata={"provider": PROVIDER_NAME},
            )

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
        service = self._service

        def _chunks() -> Iterator[str]:
            context = self._context(contents)
            answer = self._answer(context)
            deltas = answer.stream or _chunk_text(answer.text, service.chunk_size)
            chunks = _as_snapshots(deltas) if service.stream_mode == "snapshot" and not answer.stream else deltas
            for position, chunk in enumerate(chunks):
                if service.fail_with is not None and position == service.fail_after:
                    raise service.fail_with
                yield chunk
            if service.fail_with is not None and service.fail_after >= len(chunks):
                raise service.fail_with

        return normalize_stream(
            _chunks,
            lambda chunk: chunk,
            mode=service.stream_mode,
            on_complete=on_complete,
            provider=PROVIDER_NAME,
            model=self._name,
        )

    def start_chat(self, history: Optional[Sequence[Content]] = None) -> HistoryChat:
        return HistoryChat(self, history)


class MockService(Service):
    """Deterministic backend double.

    Args:
        responses: Response table keyed by current prompt; ``"*"`` is the default.
        models: Catalog returned by ``list_models``.
        stream_mode: ``"delta"`` or ``"snapshot"`` chunks for streaming.
        chunk_size: Characters per generated stream chunk.
        fail_with: Exception to raise from calls (see module docs).
        fail_after: Number of stream chunks emitted before ``fail_with``.
    """

    def __init__(
        self,
        responses: Optional[Mapping[str, ResponseSpec]] = None,
        models: Optional[Sequence[ModelInfo]] = None,
        stream_mode: Literal["delta", "snapshot"] = "delta",
        chunk_size: int = 16,
        fail_with: Optional[BaseException] = None,
        fail_after: int = 0,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        cfg = get_provider_config(PROVIDER_NAME)
        self._responses: Dict[str, MockResponse] = {
            k: MockResponse.parse(v) for k, v in (responses or {}).items()
        }
        self._catalog: List[ModelInfo] = list(models if models is not None else DEFAULT_CATALOG)
        self._default_model: str = cfg["model"]
        self.stream_mode = stream_mode
        self.chunk_size = chunk_size
        self.fail_with = fail_with
        self.fail_after = fail_after
        self._calls: List[PromptContext] = []
        self._lock = threading.Lock()
        self._logger = get_logger("common_ai.mock")

    @property
    def provider_name(self) -> str:
        return PROVIDER_NAME

    @property
    def default_model(self) -> str:
        return self._default_model

    @property
    def calls(self) -> List[PromptContext]:
        """Reconciled prompt contexts seen so far, oldest first."""
        with self._lock:
            return list(self._calls)

    def record(self, context: PromptContext) -> None:
        with self._lock:
            self._calls.append(context)

    def response_for(self, prompt: str) -> MockResponse:
        entry = self._responses.get(prompt) or self._responses.get(WILDCARD)
        return entry if entry is not None else MockResponse(texts=[""])

    def model(self, name: Optional[str] = None) -> MockModel:
        return MockModel(name or self._default_model, self)

    def list_models(self, page_size: Optional[int] = None) -> List[ModelInfo]:
        models = list(self._catalog if page_size is None else islice(self._catalog, max(page_size, 0)))
        log_event(
            self._logger,
            "models.list",
            LogContext(provider=PROVIDER_NAME),
            count=len(models),
            page_size=page_size,
        )
        return models
