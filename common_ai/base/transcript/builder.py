"""Transcript reconciliation.

Turns an ordered list of role-tagged ``Content`` values into the shape every
backend expects: one instructions block, alternating prompt/response history,
and a single trailing prompt to answer.

Rules
-----
* System turns are joined by ``"\\n"`` into the instructions block; blank ones
  are dropped. No instructions entry is emitted when nothing remains.
* Non-system turns are walked in order with at most one pending prompt:
  a second user turn demotes the pending one to a prompt-only entry; a model
  turn pairs with the pending prompt; a model turn with nothing pending is
  dropped (logged at DEBUG as ``transcript.orphan_response``).
* The walk must end with a pending prompt, otherwise ``MissingPromptError``.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..errors import MissingPromptError
from ..logging import LogContext, get_logger, log_event
from ..models import Content, Role
from .entries import Entry, Instructions, PromptEntry, ResponseEntry
from .transcript import PromptContext, Transcript

_logger = get_logger("common_ai.transcript")


def collect_instructions(contents: Sequence[Content]) -> Optional[str]:
    """Join the text of non-blank system turns, or return ``None``."""
    texts = [c.joined_text() for c in contents if c.role is Role.SYSTEM]
    kept = [t for t in texts if t.strip()]
    return "\n".join(kept) if kept else None


def build_prompt_context(
    contents: Sequence[Content],
    *,
    provider: str = "unknown",
    model: Optional[str] = None,
) -> PromptContext:
    """Reconcile ``contents`` into a :class:`PromptContext`.

    Parameters
    ----------
    contents:
        Full conversation so far, ending with the user turn to answer.
    provider, model:
        Attribution for the raised error and debug events.

    Raises
    ------
    MissingPromptError
        When the conversation does not end on a user turn (including empty
        input).
    """
    entries: List[Entry] = []
    instructions = collect_instructions(contents)
    if instructions is not None:
        entries.append(Instructions(instructions))

    pending: Optional[str] = None
    for index, content in enumerate(contents):
        if content.role is Role.SYSTEM:
            continue
        text = content.joined_text()
        if content.role is Role.USER:
            if pending is not None:
                entries.append(PromptEntry(pending))
            pending = text
        elif pending is not None:
            entries.append(PromptEntry(pending))
            entries.append(ResponseEntry(text))
            pending = None
        else:
            log_event(
                _logger,
                "transcript.orphan_response",
                LogContext(provider=provider, model=model),
                level=logging.DEBUG,
                index=index,
                length=len(text),
            )

    if pending is None:
        raise MissingPromptError(provider=provider, model=model)
    return PromptContext(transcript=Transcript(tuple(entries)), prompt=pending)


__all__ = ["build_prompt_context", "collect_instructions"]
