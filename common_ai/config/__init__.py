"""Per-backend settings resolution.

``get_provider_config("ollama")`` returns one flat dict built from four
layers, each overriding the previous one:

1. package defaults (``DEFAULTS``)
2. the backend's section of the file named by ``COMMON_AI_CONFIG_FILE``
   (JSON, or YAML through PyYAML)
3. environment variables: the alias table in ``config.env`` first, then the
   generic ``<BACKEND>_<FIELD>`` names
4. explicit values from the caller (``None`` means "not given")

A config file looks like::

    openai:
      model: gpt-4o-mini
      organization: org-123
    ollama:
      host: http://gpu-box:11434

The parsed file is cached for the life of the process; tests call
``reset_config_cache``.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from ..base.logging import get_logger, log_event
from .defaults import (
    CONFIG_FILE_ENV_VAR,
    GEMINI_DEFAULT_MODEL,
    MOCK_DEFAULT_MODEL,
    OLLAMA_DEFAULT_HOST,
    OLLAMA_DEFAULT_MODEL,
    OPENAI_DEFAULT_MODEL,
)
from .env import ENV_ALIASES, resolve_credential, resolve_first, resolve_provider_field

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"model": OPENAI_DEFAULT_MODEL},
    "gemini": {"model": GEMINI_DEFAULT_MODEL},
    "ollama": {"model": OLLAMA_DEFAULT_MODEL, "host": OLLAMA_DEFAULT_HOST},
    "mock": {"model": MOCK_DEFAULT_MODEL},
}

# settings field -> suffix of the generic <BACKEND>_<SUFFIX> variable
ENV_FIELD_MAP: Dict[str, str] = {
    "model": "MODEL",
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "base_url": "BASE_URL",
    "organization": "ORGANIZATION",
    "host": "HOST",
}

_logger = get_logger("common_ai.config")
_file_sections: Optional[Dict[str, Any]] = None


def reset_config_cache() -> None:
    """Drop the cached config file so the next lookup reads it again."""
    global _file_sections
    _file_sections = None


def _decode_file(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            log_event(_logger, "config.invalid", path=str(path), error=str(exc))
            return {}
    return data if isinstance(data, dict) else {}


def _file_section(provider: str) -> Dict[str, Any]:
    global _file_sections
    if _file_sections is None:
        location = os.getenv(CONFIG_FILE_ENV_VAR)
        path = Path(location) if location else None
        _file_sections = _decode_file(path) if path is not None and path.is_file() else {}
    section = _file_sections.get(provider)
    return section if isinstance(section, dict) else {}


def _environment_section(provider: str) -> Dict[str, Any]:
    found: Dict[str, Any] = {}
    for field, suffix in ENV_FIELD_MAP.items():
        value = resolve_first(
            resolve_provider_field(provider, field),
            os.getenv(f"{provider.upper()}_{suffix}"),
        )
        if value is not None:
            found[field] = value
    return found


def get_provider_config(provider: str, overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged settings for ``provider`` (case-insensitive key)."""
    key = (provider or "").strip().lower()
    merged: Dict[str, Any] = dict(DEFAULTS.get(key, {}))
    merged.update(_file_section(key))
    merged.update(_environment_section(key))
    merged.update({k: v for k, v in (overrides or {}).items() if v is not None})
    return merged


def get_model(provider: str) -> Optional[str]:
    """Default model name for ``provider`` after all layers are applied."""
    return get_provider_config(provider).get("model")


__all__ = [
    "get_provider_config",
    "get_model",
    "reset_config_cache",
    "DEFAULTS",
    "ENV_FIELD_MAP",
    "ENV_ALIASES",
    "resolve_first",
    "resolve_credential",
    "resolve_provider_field",
]
