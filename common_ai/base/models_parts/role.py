"""
Conversation role enumeration.

Defines the closed set of roles a turn may carry. Adapters translate these to
their wire names (for example ``model`` becomes ``assistant`` for
chat-completions style APIs); no custom roles are accepted.
"""
from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Author role of a conversation turn."""

    USER = "user"
    MODEL = "model"
    SYSTEM = "system"


__all__ = ["Role"]
