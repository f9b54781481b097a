"""
Content DTO: one role-tagged turn of a conversation.

A ``Content`` value is immutable and compares structurally. Callers normally
build it with the ``user`` / ``model`` / ``system`` constructors, which always
produce exactly one text part.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .part import Part, TextPart, part_from_dict
from .role import Role


@dataclass(frozen=True)
class Content:
    """A single conversation turn.

    Attributes:
        role: Author of the turn.
        parts: Ordered parts making up the turn (a tuple, so the value stays
            hashable and immutable).

    Methods:
        user / model / system: Convenience constructors wrapping ``text`` in a
            single ``TextPart``.
        joined_text: Concatenate all text parts without a separator.
        to_dict / from_dict: JSON-friendly encoding.
    """

    role: Role
    parts: Tuple[Part, ...]

    def __post_init__(self) -> None:
        # Accept lists from callers while keeping the stored value immutable.
        if not isinstance(self.parts, tuple):
            object.__setattr__(self, "parts", tuple(self.parts))
        if not isinstance(self.role, Role):
            object.__setattr__(self, "role", Role(self.role))

    @classmethod
    def user(cls, text: str) -> "Content":
        return cls(role=Role.USER, parts=(TextPart(text),))

    @classmethod
    def model(cls, text: str) -> "Content":
        return cls(role=Role.MODEL, parts=(TextPart(text),))

    @classmethod
    def system(cls, text: str) -> "Content":
        return cls(role=Role.SYSTEM, parts=(TextPart(text),))

    def joined_text(self) -> str:
        """Return the concatenation of every text part."""
        texts = []
        for part in self.parts:
            match part:
                case TextPart(text=text):
                    texts.append(text)
        return "".join(texts)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation."""
        return {"role": self.role.value, "parts": [p.to_dict() for p in self.parts]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Content":
        """Decode a mapping produced by :meth:`to_dict`."""
        return cls(
            role=Role(data["role"]),
            parts=tuple(part_from_dict(p) for p in data.get("parts", [])),
        )


__all__ = ["Content"]
