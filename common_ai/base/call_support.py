"""Shared single-shot call wrapper for adapters.

``invoke_complete`` brackets one backend call with the ``complete.start`` /
``complete.end`` / ``complete.error`` events and normalizes failures: a
``ProviderError`` passes through unchanged, anything else becomes a
``TransportError`` chained to the original exception. Nothing is retried.
"""
from __future__ import annotations

import logging
import time
from typing import Callable, Optional, TypeVar

from .errors import wrap_transport_error
from .logging import LogContext, log_event
from .models import Completion

T = TypeVar("T")


def invoke_backend(
    call: Callable[[], T],
    *,
    logger: logging.Logger,
    ctx: LogContext,
    event: str,
    provider: str,
    model: Optional[str] = None,
) -> T:
    """Run ``call`` and log ``<event>.end`` or ``<event>.error``.

    Raises
    ------
    ProviderError
        The original ``ProviderError`` or a ``TransportError`` wrapping any
        other exception.
    """
    t0 = time.perf_counter()
    try:
        result = call()
    except Exception as exc:
        err = wrap_transport_error(exc, provider=provider, model=model)
        log_event(
            logger,
            f"{event}.error",
            ctx,
            level=logging.WARNING,
            latency_ms=(time.perf_counter() - t0) * 1000.0,
            error_code=err.code.value,
            error=err.message,
        )
        if err is exc:
            raise
        raise err from exc
    log_event(logger, f"{event}.end", ctx, latency_ms=(time.perf_counter() - t0) * 1000.0)
    return result


def invoke_complete(
    call: Callable[[], Completion],
    *,
    logger: logging.Logger,
    provider: str,
    model: str,
    turns: int,
) -> Completion:
    """Log and run a ``Model.complete`` backend call."""
    ctx = LogContext(provider=provider, model=model)
    log_event(logger, "complete.start", ctx, turns=turns)
    return invoke_backend(
        call,
        logger=logger,
        ctx=ctx,
        event="complete",
        provider=provider,
        model=model,
    )


__all__ = ["invoke_backend", "invoke_complete"]
