"""Model Protocol (single-class module).

Stateless completion capability plus the convenience compositions every
adapter inherits by subclassing explicitly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, Sequence, runtime_checkable

from ..models import Completion, Content, Message

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .chat import Chat


@runtime_checkable
class Model(Protocol):
    """A named backend model that answers a conversation in one shot.

    Implementations translate ``contents`` to their wire format, decode the
    backend response into a ``Completion``, and raise ``ProviderError``
    subclasses on failure. ``complete([])`` must not crash locally; the
    resulting rejection is raised as an error.
    """

    @property
    def name(self) -> str:
        """Model identifier as understood by the backend."""
        ...

    def complete(self, contents: Sequence[Content]) -> Completion:
        """Return the backend's completion for ``contents``."""
        ...

    def start_chat(self, history: Optional[Sequence[Content]] = None) -> "Chat":
        """Open a stateful chat seeded with ``history``."""
        ...

    def complete_text(self, text: str) -> Completion:
        """Complete a single user turn."""
        return self.complete([Content.user(text)])

    def generate(self, contents: Sequence[Content]) -> Message:
        """Return only the primary message of ``complete(contents)``."""
        return self.complete(contents).primary_message

    def generate_text(self, text: str) -> Message:
        """Return the primary message for a single user turn."""
        return self.complete_text(text).primary_message
