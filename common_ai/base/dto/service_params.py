"""Typed parameter object for service initialization.

Purpose
-------
Capture the common constructor parameters accepted by ``common_ai`` services
so the factory has one stable contract. Provider-specific fields travel in
``extra``.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and ``.model_dump()``.

Failure modes
-------------
- Pure data container; Pydantic raises ``ValidationError`` for inputs of the
  wrong type.
"""
from __future__ import annotations

from typing import Any, Collection, Dict, Optional

from pydantic import BaseModel, Field


class ServiceParams(BaseModel):
    """Common service initialization parameters.

    Attributes
    ----------
    provider:
        Canonical provider name. Dropped before the service constructor runs.
    api_key:
        Pre-resolved credential for cloud providers.
    base_url:
        Override for the API base URL (proxies, compatible gateways).
    organization:
        Organization/tenant hint (OpenAI).
    host:
        Daemon address for local providers (Ollama).
    timeout_seconds:
        HTTP timeout hint for adapters that own their HTTP client.
    extra:
        Free-form provider-specific keyword arguments, forwarded as-is.
    """

    provider: Optional[str] = None
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    organization: Optional[str] = None
    host: Optional[str] = None
    timeout_seconds: Optional[float] = Field(default=None, gt=0)
    extra: Dict[str, Any] = Field(default_factory=dict)

    def to_kwargs(self, accepted: Optional[Collection[str]] = None) -> Dict[str, Any]:
        """Return constructor kwargs: set fields plus ``extra``, minus ``provider``.

        When ``accepted`` is given, common fields outside it are left out so a
        service never receives a parameter it does not take (for example
        ``timeout_seconds`` for a service without its own HTTP client).
        ``extra`` entries are always forwarded.
        """
        data = self.model_dump(exclude_none=True, exclude={"provider", "extra"})
        if accepted is not None:
            data = {k: v for k, v in data.items() if k in accepted}
        data.update(self.extra)
        return data


__all__ = ["ServiceParams"]
