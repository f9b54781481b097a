"""
Error raised when a conversation has no trailing user turn to answer.
"""
from __future__ import annotations

from typing import Optional

from .error_code import ErrorCode
from .provider_error import ProviderError

MISSING_PROMPT_MESSAGE = "No user message found to generate a response."


class MissingPromptError(ProviderError):
    """Transcript reconciliation ended without a pending user prompt.

    Fatal to the call that triggered it; never retried.
    """

    def __init__(
        self,
        provider: str = "unknown",
        model: Optional[str] = None,
        message: str = MISSING_PROMPT_MESSAGE,
    ) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION,
            message=message,
            provider=provider,
            model=model,
        )


__all__ = ["MissingPromptError", "MISSING_PROMPT_MESSAGE"]
