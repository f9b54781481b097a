"""
Completion DTO representing a normalized single-shot provider result.

``primary_message`` never raises: a completion decoded with zero choices
yields an empty model message so simple call sites stay ergonomic.
"""
from __future__ import annotations

import time
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from .choice import Choice
from .message import Message
from .role import Role
from .usage import Usage


def new_completion_id() -> str:
    """Return a fresh, globally unique completion identifier."""
    return "cai-" + str(uuid.uuid4()).lower()


@dataclass(frozen=True)
class Completion:
    """Provider-agnostic result of a ``Model.complete`` call.

    Attributes:
        id: Unique identifier generated per call (see ``new_completion_id``).
        created: Creation time as epoch seconds.
        model: Model name that produced the completion.
        choices: Ranked candidates; non-empty by contract but tolerated empty.
        object: Object tag, ``"chat.completion"`` by default.
        usage: Optional token accounting.
        metadata: Optional string map (adapters set ``provider``).

    Methods:
        primary_message: First choice's message or an empty model message.
        create: Build a completion stamped with a new id and current time.
        to_dict / from_dict: JSON-friendly encoding.
    """

    id: str
    created: int
    model: str
    choices: Tuple[Choice, ...]
    object: str = "chat.completion"
    usage: Optional[Usage] = None
    metadata: Optional[Mapping[str, str]] = None

    def __post_init__(self) -> None:
        if not isinstance(self.choices, tuple):
            object.__setattr__(self, "choices", tuple(self.choices))

    @property
    def primary_message(self) -> Message:
        if self.choices:
            return self.choices[0].message
        return Message(role=Role.MODEL, text="")

    @classmethod
    def create(
        cls,
        *,
        model: str,
        choices: Sequence[Choice],
        usage: Optional[Usage] = None,
        metadata: Optional[Mapping[str, str]] = None,
    ) -> "Completion":
        return cls(
            id=new_completion_id(),
            created=int(time.time()),
            model=model,
            choices=tuple(choices),
            usage=usage,
            metadata=dict(metadata) if metadata is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation."""
        return {
            "id": self.id,
            "object": self.object,
            "created": self.created,
            "model": self.model,
            "choices": [c.to_dict() for c in self.choices],
            "usage": self.usage.to_dict() if self.usage else None,
            "metadata": dict(self.metadata) if self.metadata is not None else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Completion":
        usage = data.get("usage")
        metadata = data.get("metadata")
        return cls(
            id=str(data["id"]),
            object=str(data.get("object", "chat.completion")),
            created=int(data["created"]),
            model=str(data["model"]),
            choices=tuple(Choice.from_dict(c) for c in data.get("choices", [])),
            usage=Usage.from_dict(usage) if usage else None,
            metadata=dict(metadata) if metadata is not None else None,
        )


__all__ = ["Completion", "new_completion_id"]
