"""common_ai.config.defaults
==========================

Small, stable default values used across the adapters. They can be
overridden via environment variables, a config file, or explicit arguments.

Only plain constants live here; no I/O and no imports from other common_ai
packages.
"""

from __future__ import annotations

# ---- Provider-specific sane defaults ----
# OpenAI (SDK uses api.openai.com when base_url omitted).
OPENAI_DEFAULT_MODEL = "gpt-4o-mini"

# Gemini
GEMINI_DEFAULT_MODEL = "gemini-1.5-flash"

# Ollama (local daemon)
OLLAMA_DEFAULT_MODEL = "llama3.2"
OLLAMA_DEFAULT_HOST = "http://localhost:11434"

# Mock backend
MOCK_DEFAULT_MODEL = "mock-1"

# ---- HTTP ----
# Seconds; default for the httpx client each local-daemon service owns.
HTTP_DEFAULT_TIMEOUT = 60.0

# ---- Config file ----
CONFIG_FILE_ENV_VAR = "COMMON_AI_CONFIG_FILE"


__all__ = [
    "OPENAI_DEFAULT_MODEL",
    "GEMINI_DEFAULT_MODEL",
    "OLLAMA_DEFAULT_MODEL",
    "OLLAMA_DEFAULT_HOST",
    "MOCK_DEFAULT_MODEL",
    "HTTP_DEFAULT_TIMEOUT",
    "CONFIG_FILE_ENV_VAR",
]
