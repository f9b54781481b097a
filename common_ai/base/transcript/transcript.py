"""Transcript and prompt context containers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .entries import Entry, Instructions, PromptEntry, ResponseEntry

# Chat-completions role names used by ``Transcript.to_messages``.
SYSTEM_ROLE = "system"
USER_ROLE = "user"
ASSISTANT_ROLE = "assistant"


@dataclass(frozen=True)
class Transcript:
    """Ordered transcript entries; instructions, when present, come first.

    Attributes:
        entries: Tuple of ``Instructions`` / ``PromptEntry`` / ``ResponseEntry``.
    """

    entries: Tuple[Entry, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.entries, tuple):
            object.__setattr__(self, "entries", tuple(self.entries))

    @property
    def instructions(self) -> Optional[str]:
        """Text of the first instructions entry, or ``None``."""
        for entry in self.entries:
            if isinstance(entry, Instructions):
                return entry.text
        return None

    @property
    def history(self) -> Tuple[Entry, ...]:
        """Prompt and response entries only."""
        return tuple(e for e in self.entries if not isinstance(e, Instructions))

    def to_messages(self) -> List[Tuple[str, str]]:
        """Render the transcript as ``(role, text)`` pairs.

        Instructions map to ``system``, prompts to ``user`` and responses to
        ``assistant``.
        """
        out: List[Tuple[str, str]] = []
        for entry in self.entries:
            match entry:
                case Instructions(text=text):
                    out.append((SYSTEM_ROLE, text))
                case PromptEntry(text=text):
                    out.append((USER_ROLE, text))
                case ResponseEntry(text=text):
                    out.append((ASSISTANT_ROLE, text))
        return out

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class PromptContext:
    """Reconciled request shape: transcript plus the current prompt to submit."""

    transcript: Transcript
    prompt: str

    def to_messages(self) -> List[Tuple[str, str]]:
        """Transcript messages followed by the current prompt as a user turn."""
        return self.transcript.to_messages() + [(USER_ROLE, self.prompt)]


__all__ = [
    "Transcript",
    "PromptContext",
    "SYSTEM_ROLE",
    "USER_ROLE",
    "ASSISTANT_ROLE",
]
