"""common_ai.config.env
=====================

Environment variable alias tables and the explicit credential resolution
helpers used by every service constructor.

Design Notes
------------
- Each provider field maps to an ordered tuple of environment variable names,
  canonical first. The first present, non-blank value wins.
- An explicit argument always beats the environment.
- Helpers never raise on unknown providers or unset variables; callers decide
  how to proceed.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Mapping, Optional, Tuple

# Provider -> field -> ordered env var names (canonical first)
ENV_ALIASES: Dict[str, Dict[str, Tuple[str, ...]]] = {
    "openai": {
        "api_key": ("OPENAI_API_KEY", "OPENAI_KEY", "OPENAI_APIKEY"),
        "organization": ("OPENAI_ORG_ID", "OPENAI_ORG", "OPENAI_ORGANIZATION"),
        "base_url": ("OPENAI_BASE_URL",),
        "model": ("OPENAI_MODEL",),
    },
    "gemini": {
        # GEMINI_API_KEY is canonical; GOOGLE_API_KEY is the SDK's own name.
        "api_key": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
        "model": ("GEMINI_MODEL",),
    },
    "ollama": {
        "host": ("OLLAMA_HOST",),
        "model": ("OLLAMA_MODEL",),
    },
}


def resolve_first(*sources: Optional[str]) -> Optional[str]:
    """Return the first source that is present and not blank.

    Values are returned as given (not stripped); whitespace-only strings count
    as absent.
    """
    for value in sources:
        if value is not None and value.strip():
            return value
    return None


def env_candidates(provider: str, field: str) -> Tuple[str, ...]:
    """Return the env var names consulted for ``provider``/``field``."""
    return ENV_ALIASES.get((provider or "").lower(), {}).get(field, ())


def resolve_credential(
    explicit: Optional[str],
    env_names: Iterable[str],
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[str]:
    """Resolve a credential: ``explicit`` first, then ``env_names`` in order.

    Parameters
    ----------
    explicit:
        Value passed by the caller, if any.
    env_names:
        Environment variable names in priority order.
    environ:
        Mapping to read from; defaults to ``os.environ``.
    """
    env = os.environ if environ is None else environ
    return resolve_first(explicit, *(env.get(name) for name in env_names))


def resolve_provider_field(
    provider: str,
    field: str,
    explicit: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[str]:
    """Shorthand for :func:`resolve_credential` over the alias table."""
    return resolve_credential(explicit, env_candidates(provider, field), environ)


__all__ = [
    "ENV_ALIASES",
    "resolve_first",
    "env_candidates",
    "resolve_credential",
    "resolve_provider_field",
]
