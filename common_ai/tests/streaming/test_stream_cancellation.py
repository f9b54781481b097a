"""Cancellation tests for the stream normalizer.

Cancelling, closing, leaving a ``with`` block, or dropping the stream must
stop the upstream, close it, and never commit.
"""
from __future__ import annotations

import gc
import threading

from common_ai.base.streaming import normalize_stream


def test_cancel_mid_stream_stops_and_closes_upstream(upstream_factory, commits, log_events) -> None:
    print("TEST: cancellation mid-stream closes upstream without commit")
    up = upstream_factory(["a", "b", "c"])
    stream = normalize_stream(lambda: up, on_complete=commits.append)
    assert next(stream).text == "a"  # nosec B101 - pytest assertion in tests
    stream.cancel("user abort")
    assert list(stream) == []  # nosec B101 - nothing after cancellation
    assert up.closed and up.pulled == 1  # nosec B101 - pytest assertion in tests
    assert stream.cancelled and not stream.finished and commits == []  # nosec B101
    cancelled = [e for e in log_events() if e["event"] == "stream.cancelled"]
    assert len(cancelled) == 1 and cancelled[0]["reason"] == "user abort"  # nosec B101


def test_cancel_before_start_never_calls_starter(commits, log_events) -> None:
    calls = []
    stream = normalize_stream(lambda: calls.append(1) or ["x"], on_complete=commits.append)
    stream.cancel("not needed")
    stream.cancel("again")
    assert list(stream) == [] and calls == [] and commits == []  # nosec B101
    events = [e for e in log_events() if e["event"].startswith("stream.")]
    assert [e["event"] for e in events] == ["stream.cancelled"]  # nosec B101
    assert events[0]["reason"] == "not needed" and events[0]["emitted_count"] == 0  # nosec B101


def test_cancel_is_idempotent(upstream_factory) -> None:
    stream = normalize_stream(lambda: upstream_factory(["a"]))
    next(stream)
    stream.cancel("first")
    stream.cancel("second")
    assert stream.cancelled  # nosec B101 - pytest assertion in tests


def test_context_manager_exit_closes_unfinished_stream(upstream_factory, commits) -> None:
    up = upstream_factory(["a", "b"])
    with normalize_stream(lambda: up, on_complete=commits.append) as stream:
        next(stream)
    assert up.closed and stream.cancelled and commits == []  # nosec B101


def test_close_after_natural_end_keeps_commit(upstream_factory, commits) -> None:
    with normalize_stream(lambda: upstream_factory(["a"]), on_complete=commits.append) as stream:
        list(stream)
    assert commits == ["a"] and not stream.cancelled  # nosec B101


def test_dropping_stream_stops_upstream_immediately(upstream_factory, commits, log_events) -> None:
    """Releasing the last reference closes the upstream without waiting for the cycle collector."""
    up = upstream_factory(["a", "b", "c"])
    stream = normalize_stream(lambda: up, on_complete=commits.append)
    next(stream)
    gc.disable()
    try:
        del stream
        assert up.closed and up.pulled == 1  # nosec B101 - pytest assertion in tests
    finally:
        gc.enable()
    assert commits == []  # nosec B101 - pytest assertion in tests
    cancelled = [e for e in log_events() if e["event"] == "stream.cancelled"]
    assert len(cancelled) == 1 and cancelled[0]["reason"] == "abandoned"  # nosec B101


def test_dropping_unstarted_stream_never_calls_starter() -> None:
    calls = []
    stream = normalize_stream(lambda: calls.append(1) or ["x"])
    gc.disable()
    try:
        del stream
    finally:
        gc.enable()
    assert calls == []  # nosec B101 - pytest assertion in tests


def test_cancel_from_another_thread_is_observed(commits) -> None:
    """A cancel issued while the consumer waits on upstream stops after that chunk."""
    gate = threading.Event()
    release = threading.Event()
    closed = []

    def _upstream():
        try:
            yield "a"
            gate.set()
            release.wait(timeout=5)
            yield "b"
            yield "c"
        finally:
            closed.append(True)

    stream = normalize_stream(_upstream, on_complete=commits.append)
    received = []

    def _consume():
        for item in stream:
            received.append(item.text)

    worker = threading.Thread(target=_consume)
    worker.start()
    assert gate.wait(timeout=5)  # nosec B101 - pytest assertion in tests
    stream.cancel("other thread")
    release.set()
    worker.join(timeout=5)
    assert not worker.is_alive()  # nosec B101 - pytest assertion in tests
    assert received == ["a"] and closed == [True] and commits == []  # nosec B101
