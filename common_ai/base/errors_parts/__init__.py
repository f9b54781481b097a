"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `common_ai.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .missing_prompt_error import MissingPromptError
from .provider_unavailable_error import ProviderUnavailableError
from .transport_error import TransportError
from .classification import classify_exception, wrap_transport_error

__all__ = [
    "ErrorCode",
    "ProviderError",
    "MissingPromptError",
    "ProviderUnavailableError",
    "TransportError",
    "classify_exception",
    "wrap_transport_error",
]
