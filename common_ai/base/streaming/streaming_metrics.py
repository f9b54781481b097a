"""Streaming metrics data structure.

Collected by :class:`MessageStream` for a single streamed turn and attached to
the terminal log event.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass
class StreamMetrics:
    """Collected metrics for one streamed turn.

    Attributes:
        emitted: Number of cumulative messages yielded to the consumer.
        chunks: Number of native chunks read from the upstream primitive.
        time_to_first_token_ms: Delay from start to the first yielded message.
        total_duration_ms: Delay from start to termination (any kind).
        final_length: Length of the last yielded text.
    """

    emitted: int = 0
    chunks: int = 0
    time_to_first_token_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    final_length: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["StreamMetrics"]
