"""Transcript reconciliation package.

Re-exports the entry types, containers, and the builder so adapters import
from ``common_ai.base.transcript`` only.
"""

from .entries import Entry, Instructions, PromptEntry, ResponseEntry
from .transcript import ASSISTANT_ROLE, SYSTEM_ROLE, USER_ROLE, PromptContext, Transcript
from .builder import build_prompt_context, collect_instructions

__all__ = [
    "Entry",
    "Instructions",
    "PromptEntry",
    "ResponseEntry",
    "Transcript",
    "PromptContext",
    "SYSTEM_ROLE",
    "USER_ROLE",
    "ASSISTANT_ROLE",
    "build_prompt_context",
    "collect_instructions",
]
