"""
Choice DTO: one ranked candidate completion.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .message import Message


@dataclass(frozen=True)
class Choice:
    """A candidate completion ranked by ``index`` (0 is the primary answer).

    Attributes:
        index: Rank of the candidate.
        message: Decoded candidate message.
        finish_reason: Provider finish reason string when reported.
    """

    index: int
    message: Message
    finish_reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "message": self.message.to_dict(),
            "finish_reason": self.finish_reason,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Choice":
        return cls(
            index=int(data.get("index", 0)),
            message=Message.from_dict(data["message"]),
            finish_reason=data.get("finish_reason"),
        )


__all__ = ["Choice"]
