"""Cumulative, cancellable message stream.

``MessageStream`` is the single streaming contract every adapter returns. It
wraps whatever incremental primitive a backend offers (token deltas, full
snapshots per event, chunked HTTP lines) and yields ``Message`` values that
always carry the text accumulated so far for the turn.

Lifecycle
---------
* The upstream is started lazily on the first ``next()``; a failure while
  starting is raised from that ``next()``, never from construction.
* The stream ends exactly once: naturally (``StopIteration``), by raising a
  :class:`ProviderError`, or by cancellation. Nothing is yielded afterwards.
  Each end emits one ``stream.end`` / ``stream.error`` / ``stream.cancelled``
  event, including a cancel issued before the first ``next()``. A stream
  dropped without ever being pulled or cancelled emits nothing.
* ``on_complete(final_text)`` runs once, after natural termination, and only
  when ``final_text`` is non-empty. Chats use it to commit history.
* ``cancel()`` / ``close()``, leaving a ``with`` block, or dropping the last
  reference stops the upstream and calls its ``close()`` when it has one.

The driving generator only references a :class:`_StreamState`, never the
``MessageStream`` itself, so releasing the stream finalizes it immediately.

Single consumer only. ``cancel`` may be called from another thread; the
consumer then stops after the chunk currently being read.
"""
from __future__ import annotations

import time
from contextlib import suppress
from typing import Any, Callable, Iterable, Iterator, Literal, Optional

from ..cancellation import CancellationToken
from ..errors import ProviderError, wrap_transport_error
from ..logging import LogContext, get_logger, log_event
from ..models import Message, Role
from .streaming_finalize import finalize_stream
from .streaming_metrics import StreamMetrics

StreamMode = Literal["delta", "snapshot"]
Starter = Callable[[], Iterable[Any]]
Translator = Callable[[Any], Optional[str]]
CompletionCallback = Callable[[str], None]


def _identity_text(chunk: Any) -> Optional[str]:
    return chunk if isinstance(chunk, str) else None


class _StreamState:
    """Everything one streamed turn accumulates, shared by the stream and its generator."""

    def __init__(
        self,
        starter: Starter,
        translator: Translator,
        mode: StreamMode,
        on_complete: Optional[CompletionCallback],
        provider: str,
        model: Optional[str],
        token: CancellationToken,
    ) -> None:
        self.starter = starter
        self.translator = translator
        self.mode = mode
        self.on_complete = on_complete
        self.provider = provider
        self.model = model
        self.token = token
        self.ctx = LogContext(provider=provider, model=model, extra={"mode": mode})
        self.logger = get_logger("common_ai.streaming")
        self.metrics = StreamMetrics()
        self.text = ""
        self.started_at: Optional[float] = None
        self.finished = False
        self.error: Optional[ProviderError] = None
        self._terminated = False

    def accept(self, piece: str) -> bool:
        """Fold ``piece`` into the running text; return True if it grew."""
        if self.mode == "delta":
            self.text += piece
            return True
        if len(piece) <= len(self.text):
            return False
        self.text = piece
        return True

    def terminate(self, outcome: str, error: Optional[ProviderError] = None) -> None:
        """Emit the terminal event; later calls are no-ops."""
        if self._terminated:
            return
        self._terminated = True
        finalize_stream(
            logger=self.logger,
            ctx=self.ctx,
            metrics=self.metrics,
            started_at=self.started_at if self.started_at is not None else time.perf_counter(),
            outcome=outcome,
            error=error,
            reason=self.token.reason if outcome == "cancelled" else None,
        )

    def fail(self, exc: BaseException) -> ProviderError:
        err = wrap_transport_error(exc, provider=self.provider, model=self.model)
        self.error = err
        self.terminate("error", err)
        return err


def _drive(state: _StreamState) -> Iterator[Message]:
    state.started_at = time.perf_counter()
    log_event(state.logger, "stream.start", state.ctx)
    try:
        upstream = state.starter()
    except Exception as exc:
        err = state.fail(exc)
        if err is exc:
            raise
        raise err from exc

    try:
        for chunk in upstream:
            if state.token.cancelled:
                state.terminate("cancelled")
                return
            state.metrics.chunks += 1
            piece = state.translator(chunk)
            if not piece or not state.accept(piece):
                continue
            if state.metrics.emitted == 0:
                state.metrics.time_to_first_token_ms = (time.perf_counter() - state.started_at) * 1000.0
            state.metrics.emitted += 1
            state.metrics.final_length = len(state.text)
            yield Message(role=Role.MODEL, text=state.text)
        if state.token.cancelled:
            state.terminate("cancelled")
            return
    except GeneratorExit:
        if not state.token.cancelled:
            state.token.cancel("abandoned")
        state.terminate("cancelled")
        raise
    except Exception as exc:
        err = state.fail(exc)
        if err is exc:
            raise
        raise err from exc
    finally:
        close_fn = getattr(upstream, "close", None)
        if callable(close_fn):
            close_fn()

    state.finished = True
    state.terminate("end")
    if state.text and state.on_complete is not None:
        state.on_complete(state.text)


class MessageStream:
    """Iterator of cumulative ``Message`` values for one streamed turn.

    Parameters
    ----------
    starter:
        Zero-argument callable returning the native iterable. Invoked lazily.
    translator:
        Maps one native chunk to its text (a delta or a snapshot depending on
        ``mode``). ``None`` or ``""`` means the chunk carries no text.
    mode:
        ``"delta"`` accumulates fragments; ``"snapshot"`` treats each chunk as
        the running total. Non-growing snapshots are skipped so emitted lengths
        never decrease.
    on_complete:
        Commit hook receiving the final text after natural termination.
    provider, model:
        Used for error attribution and log context.
    """

    def __init__(
        self,
        starter: Starter,
        translator: Translator = _identity_text,
        *,
        mode: StreamMode = "delta",
        on_complete: Optional[CompletionCallback] = None,
        provider: str = "unknown",
        model: Optional[str] = None,
        token: Optional[CancellationToken] = None,
    ) -> None:
        if mode not in ("delta", "snapshot"):
            raise ValueError(f"unknown stream mode: {mode!r}")
        self._state = _StreamState(
            starter,
            translator,
            mode,
            on_complete,
            provider,
            model,
            token or CancellationToken(),
        )
        self._gen = _drive(self._state)

    # Constructors ------------------------------------------------------
    @classmethod
    def failed(
        cls,
        error: BaseException,
        *,
        provider: str = "unknown",
        model: Optional[str] = None,
    ) -> "MessageStream":
        """Return a stream that raises ``error`` (wrapped if needed) when consumed."""

        def _starter() -> Iterable[Any]:
            raise error

        return cls(_starter, provider=provider, model=model)

    @classmethod
    def from_deltas(cls, deltas: Iterable[str], **kwargs: Any) -> "MessageStream":
        """Stream over an iterable of plain text deltas."""
        return cls(lambda: deltas, mode="delta", **kwargs)

    @classmethod
    def from_snapshots(cls, snapshots: Iterable[str], **kwargs: Any) -> "MessageStream":
        """Stream over an iterable of cumulative text snapshots."""
        return cls(lambda: snapshots, mode="snapshot", **kwargs)

    # Iterator protocol -------------------------------------------------
    def __iter__(self) -> Iterator[Message]:
        return self

    def __next__(self) -> Message:
        if self._state.token.cancelled:
            self._stop()
            raise StopIteration
        return next(self._gen)

    def __enter__(self) -> "MessageStream":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __del__(self) -> None:
        gen = getattr(self, "_gen", None)
        if gen is not None:
            with suppress(ValueError):
                gen.close()

    # API ---------------------------------------------------------------
    def cancel(self, reason: Optional[str] = None) -> None:
        """Stop the stream without committing; safe to call repeatedly."""
        self._state.token.cancel(reason or "cancelled by caller")
        self._stop()

    def close(self) -> None:
        """Alias for :meth:`cancel` when the stream has not finished."""
        if not self._state.finished:
            self.cancel("closed")

    @property
    def text(self) -> str:
        """Cumulative text yielded so far."""
        return self._state.text

    @property
    def finished(self) -> bool:
        """Whether the stream reached natural termination."""
        return self._state.finished

    @property
    def cancelled(self) -> bool:
        return self._state.token.cancelled

    @property
    def error(self) -> Optional[ProviderError]:
        """The failure raised to the consumer, if any."""
        return self._state.error

    @property
    def metrics(self) -> StreamMetrics:
        return self._state.metrics

    def result(self) -> Message:
        """Consume the remaining stream and return the final cumulative message."""
        for _ in self:
            pass
        return Message(role=Role.MODEL, text=self._state.text)

    # Internals ---------------------------------------------------------
    def _stop(self) -> None:
        # ValueError: the consumer thread is inside next(); it observes the
        # token after the current chunk and closes the upstream itself.
        with suppress(ValueError):
            self._gen.close()
        if self._state.started_at is None:
            self._state.terminate("cancelled")


def normalize_stream(
    starter: Starter,
    translator: Translator = _identity_text,
    *,
    mode: StreamMode = "delta",
    on_complete: Optional[CompletionCallback] = None,
    provider: str = "unknown",
    model: Optional[str] = None,
) -> MessageStream:
    """Wrap a provider-native incremental primitive into a :class:`MessageStream`.

    Construction never raises for upstream problems; ``starter`` is only
    invoked once the consumer asks for the first item.
    """
    return MessageStream(
        starter,
        translator,
        mode=mode,
        on_complete=on_complete,
        provider=provider,
        model=model,
    )


__all__ = [
    "MessageStream",
    "normalize_stream",
    "StreamMode",
    "Starter",
    "Translator",
    "CompletionCallback",
]
