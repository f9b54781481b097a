"""Service Protocol (single-class module).

Entry point for a provider: hands out models and lists the catalog.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable

from ..models import ModelInfo
from .model import Model


@runtime_checkable
class Service(Protocol):
    """Provider-level factory and catalog."""

    @property
    def provider_name(self) -> str:
        """Canonical provider identifier, e.g., ``"openai"`` or ``"ollama"``."""
        ...

    def model(self, name: Optional[str] = None) -> Model:
        """Return a model handle (the configured default when ``name`` is None); no network call is made."""
        ...

    def list_models(self, page_size: Optional[int] = None) -> List[ModelInfo]:
        """Return the catalog, truncated to the first ``page_size`` entries when set."""
        ...
