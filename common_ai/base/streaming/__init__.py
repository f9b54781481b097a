"""Streaming package for the common_ai layer.

Exposes the cumulative message stream, the normalizer entry point, metrics,
and the terminal logging helper under a single namespace.
"""

from .message_stream import (
    CompletionCallback,
    MessageStream,
    Starter,
    StreamMode,
    Translator,
    normalize_stream,
)
from .streaming_finalize import finalize_stream
from .streaming_metrics import StreamMetrics

__all__ = [
    "MessageStream",
    "normalize_stream",
    "StreamMode",
    "Starter",
    "Translator",
    "CompletionCallback",
    "StreamMetrics",
    "finalize_stream",
]
