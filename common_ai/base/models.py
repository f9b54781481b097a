"""
Canonical conversational data model public surface.

This module re-exports the one-class-per-file implementations under
``common_ai.base.models_parts`` so adapters and callers share a single import
path for roles, parts, turns, and completion results.
"""

from .models_parts.role import Role
from .models_parts.part import Part, TextPart, part_from_dict
from .models_parts.content import Content
from .models_parts.message import Message
from .models_parts.choice import Choice
from .models_parts.usage import Usage
from .models_parts.completion import Completion, new_completion_id
from .models_parts.model_info import ModelInfo

__all__ = [
    "Role",
    "Part",
    "TextPart",
    "part_from_dict",
    "Content",
    "Message",
    "Choice",
    "Usage",
    "Completion",
    "new_completion_id",
    "ModelInfo",
]
