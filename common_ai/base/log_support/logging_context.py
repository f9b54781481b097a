"""Correlation fields attached to every structured event.

A ``LogContext`` names who the event is about (backend key, model, optional
request id) plus free-form ``extra`` fields such as the stream mode.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Provider/model attribution for ``log_event`` payloads."""

    provider: Optional[str] = None
    model: Optional[str] = None
    request_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into one mapping; ``extra`` keys sit beside the named ones and unset values are omitted."""
        merged: Dict[str, Any] = {
            "provider": self.provider,
            "model": self.model,
            "request_id": self.request_id,
            **(self.extra or {}),
        }
        return {key: value for key, value in merged.items() if value is not None}


__all__ = ["LogContext"]
