"""Unified provider error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``common_ai.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.missing_prompt_error import MissingPromptError
from .errors_parts.provider_unavailable_error import ProviderUnavailableError
from .errors_parts.transport_error import TransportError
from .errors_parts.classification import classify_exception, wrap_transport_error

__all__ = [
    "ErrorCode",
    "ProviderError",
    "MissingPromptError",
    "ProviderUnavailableError",
    "TransportError",
    "classify_exception",
    "wrap_transport_error",
]
