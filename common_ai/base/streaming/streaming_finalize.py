"""Terminal logging for streamed turns.

Keeps the consolidated ``stream.end`` / ``stream.error`` / ``stream.cancelled``
event shape in one place so every adapter reports the same fields.
"""
from __future__ import annotations

import logging
import time
from typing import Optional

from ..errors import ProviderError
from ..logging import LogContext, log_event
from .streaming_metrics import StreamMetrics


def finalize_stream(
    *,
    logger: logging.Logger,
    ctx: LogContext,
    metrics: StreamMetrics,
    started_at: float,
    outcome: str,
    error: Optional[ProviderError] = None,
    reason: Optional[str] = None,
) -> None:
    """Stamp the total duration and emit the terminal stream event.

    Parameters
    ----------
    outcome:
        One of ``"end"``, ``"error"`` or ``"cancelled"``; becomes the event
        suffix.
    error:
        The failure surfaced to the consumer when ``outcome == "error"``.
    reason:
        Cancellation reason when ``outcome == "cancelled"``.
    """
    metrics.total_duration_ms = (time.perf_counter() - started_at) * 1000.0
    log_event(
        logger,
        f"stream.{outcome}",
        ctx,
        level=logging.WARNING if outcome == "error" else logging.INFO,
        emitted_count=metrics.emitted,
        chunks=metrics.chunks,
        final_length=metrics.final_length,
        time_to_first_token_ms=metrics.time_to_first_token_ms,
        total_duration_ms=metrics.total_duration_ms,
        error_code=error.code.value if error is not None else None,
        error=error.message if error is not None else None,
        reason=reason,
    )


__all__ = ["finalize_stream"]
