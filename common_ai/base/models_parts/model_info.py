"""
ModelInfo DTO for provider catalog listings.

``name`` is the identifier; ``id`` is an alias for it. Every other field is
optional display or limit metadata.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ModelInfo:
    """A single model catalog entry.

    Attributes:
        name: Stable model identifier (also the ``id``).
        display_name: Human-friendly name.
        description: Free-form provider description.
        input_token_limit: Maximum prompt tokens when reported.
        output_token_limit: Maximum completion tokens when reported.
    """

    name: str
    display_name: Optional[str] = None
    description: Optional[str] = None
    input_token_limit: Optional[int] = None
    output_token_limit: Optional[int] = None

    @property
    def id(self) -> str:
        return self.name

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["ModelInfo"]
