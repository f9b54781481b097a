"""Transcript entry value types.

A transcript is the provider-shaped rendering of a conversation: an optional
instructions block followed by prompt and response entries in the order they
were exchanged. The three entry kinds form a closed union (``Entry``).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Instructions:
    """System instructions collected from every system turn."""

    text: str


@dataclass(frozen=True)
class PromptEntry:
    """A user prompt that is already part of the conversation history."""

    text: str


@dataclass(frozen=True)
class ResponseEntry:
    """A model response paired with the prompt entry preceding it."""

    text: str


Entry = Union[Instructions, PromptEntry, ResponseEntry]

__all__ = ["Instructions", "PromptEntry", "ResponseEntry", "Entry"]
