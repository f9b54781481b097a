"""Shared ``Chat`` implementation.

``HistoryChat`` keeps the conversation in memory and delegates each exchange
to its model with the full history prepended. History is committed only after
a successful ``send`` or after a stream ends naturally with non-empty text.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .errors import ErrorCode, ProviderError
from .interfaces import Chat, Model, SupportsStreaming
from .logging import LogContext, get_logger, log_event
from .models import Content, Message
from .streaming import MessageStream


class HistoryChat(Chat):
    """In-memory chat bound to one model.

    Not safe for overlapping calls on the same instance; callers must
    serialize ``send`` / ``send_stream``.
    """

    def __init__(self, model: Model, history: Optional[Sequence[Content]] = None) -> None:
        self._model = model
        self._history: List[Content] = list(history or ())
        self._logger = get_logger("common_ai.chat")

    @property
    def model(self) -> Model:
        return self._model

    @property
    def history(self) -> Tuple[Content, ...]:
        return tuple(self._history)

    def _provider(self) -> str:
        return getattr(self._model, "provider_name", "unknown")

    def _commit(self, contents: Sequence[Content], text: str) -> None:
        self._history.extend(contents)
        self._history.append(Content.model(text))
        log_event(
            self._logger,
            "chat.commit",
            LogContext(provider=self._provider(), model=self._model.name),
            turns=len(contents) + 1,
            history_length=len(self._history),
            response_length=len(text),
        )

    def send(self, contents: Sequence[Content]) -> Message:
        contents = list(contents)
        message = self._model.generate(self.history + tuple(contents))
        self._commit(contents, message.text)
        return message

    def send_stream(self, contents: Sequence[Content]) -> MessageStream:
        contents = list(contents)
        if not isinstance(self._model, SupportsStreaming):
            return MessageStream.failed(
                ProviderError(
                    code=ErrorCode.UNSUPPORTED,
                    message="model does not support streaming",
                    provider=self._provider(),
                    model=self._model.name,
                ),
                provider=self._provider(),
                model=self._model.name,
            )
        return self._model.stream(
            self.history + tuple(contents),
            on_complete=lambda text: self._commit(contents, text),
        )


__all__ = ["HistoryChat"]
