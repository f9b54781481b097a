"""Models parts package public surface.

Re-exports individual DTOs so callers can import from
`common_ai.base.models_parts` if needed, while `common_ai.base.models` remains
the primary stable import path.
"""

from .role import Role
from .part import Part, TextPart, part_from_dict
from .content import Content
from .message import Message
from .choice import Choice
from .usage import Usage
from .completion import Completion, new_completion_id
from .model_info import ModelInfo

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
