"""Chat Protocol (single-class module)."""

from __future__ import annotations

from typing import Protocol, Sequence, Tuple, runtime_checkable

from ..models import Content, Message
from ..streaming import MessageStream


@runtime_checkable
class Chat(Protocol):
    """Stateful multi-turn session owning its history.

    History only grows after a successful exchange. Overlapping ``send`` /
    ``send_stream`` calls on the same instance are unsupported.
    """

    @property
    def history(self) -> Tuple[Content, ...]:
        """Committed turns, oldest first."""
        ...

    def send(self, contents: Sequence[Content]) -> Message:
        """Send new turns and block until the full reply is available."""
        ...

    def send_stream(self, contents: Sequence[Content]) -> MessageStream:
        """Send new turns and return a stream of cumulative reply messages."""
        ...

    def send_text(self, text: str) -> Message:
        """Send a single user turn."""
        return self.send([Content.user(text)])
