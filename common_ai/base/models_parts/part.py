"""
Content part variants.

``Part`` is a closed sum type. Today it has a single variant, ``TextPart``;
new kinds (for example media) are added as new frozen dataclasses and appended
to the ``Part`` union so that ``match`` statements over parts stay exhaustive.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Union


@dataclass(frozen=True)
class TextPart:
    """A plain text fragment of a turn.

    Attributes:
        text: The textual payload.
    """

    text: str

    def to_dict(self) -> Dict[str, Any]:
        """Return the tagged JSON-serializable form ``{"type": "text", ...}``."""
        return {"type": "text", "text": self.text}


Part = Union[TextPart]


def part_from_dict(data: Dict[str, Any]) -> Part:
    """Decode a tagged part mapping produced by ``to_dict``.

    Raises:
        ValueError: When the ``type`` tag is not a known part kind.
    """
    kind = data.get("type")
    if kind == "text":
        return TextPart(text=str(data.get("text", "")))
    raise ValueError(f"unknown part type: {kind!r}")


__all__ = ["TextPart", "Part", "part_from_dict"]
