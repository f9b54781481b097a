"""SupportsStreaming Protocol (single-class module).

Capability marker for models that can reveal a turn incrementally.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from ..models import Content
from ..streaming import MessageStream


@runtime_checkable
class SupportsStreaming(Protocol):
    """Models that can stream a turn as cumulative messages.

    ``stream`` must not raise for upstream problems; construction failures are
    reported through the returned stream on first consumption.
    """

    def stream(self, contents: Sequence[Content], *, on_complete=None) -> MessageStream:  # pragma: no cover - interface
        """Stream the answer to ``contents``; ``on_complete`` receives the final text."""
        ...
