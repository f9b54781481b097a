"""
Message DTO returned to callers.

The flattened output shape of a decoded provider response: parts are joined
into a single ``text`` string.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from .role import Role


@dataclass(frozen=True)
class Message:
    """A flattened, role-tagged message.

    Attributes:
        role: Author role (normally ``Role.MODEL`` for responses).
        text: Full text of the message.
    """

    role: Role
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"role": self.role.value, "text": self.text}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Message":
        return cls(role=Role(data["role"]), text=str(data.get("text", "")))


__all__ = ["Message"]
