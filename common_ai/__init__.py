"""common_ai package

Provider-agnostic abstraction over conversational language-model backends.

Purpose:
    One interface for single-shot completions and multi-turn chats against
    interchangeable providers (OpenAI, Gemini, a local Ollama daemon, and a
    deterministic mock). Callers build role-tagged ``Content`` turns and get
    back ``Completion`` / ``Message`` values; streaming returns a cumulative,
    cancellable ``MessageStream``.

Public API (re-exported):
    - Version: ``__version__``
    - Models: ``Role``, ``TextPart``, ``Content``, ``Message``, ``Choice``,
      ``Usage``, ``Completion``, ``ModelInfo``
    - Interfaces: ``Model``, ``Chat``, ``Service``, ``SupportsStreaming``
    - Streaming: ``MessageStream``
    - Exceptions: ``ProviderError`` and subclasses, ``ErrorCode``
    - Factory: :func:`create`, ``ServiceFactory``, ``ServiceParams``

Example:
    >>> import common_ai
    >>> svc = common_ai.create("mock", responses={"*": "hi"})
    >>> svc.model().generate_text("hello").text
    'hi'
"""

from typing import Any, Optional

from .base import (
    Chat,
    Choice,
    Completion,
    Content,
    ErrorCode,
    HistoryChat,
    Message,
    MessageStream,
    MissingPromptError,
    Model,
    ModelInfo,
    ProviderError,
    ProviderUnavailableError,
    Role,
    Service,
    ServiceFactory,
    ServiceParams,
    SupportsStreaming,
    TextPart,
    TransportError,
    ServiceArgumentError,
    UnknownProviderError,
    Usage,
)
from .base.logging import configure_logger, get_logger

__version__ = "0.1.0"


def create(provider: str, params: Optional[ServiceParams] = None, **kwargs: Any) -> Service:
    """Create a service by canonical provider name (``openai``, ``gemini``, ``ollama``, ``mock``).

    Raises:
        UnknownProviderError: Unknown name.
        ServiceArgumentError: The service constructor rejected the arguments.
    """
    return ServiceFactory.create(provider, params, **kwargs)


__all__ = [
    # Version
    "__version__",
    # Models
    "Role",
    "TextPart",
    "Content",
    "Message",
    "Choice",
    "Usage",
    "Completion",
    "ModelInfo",
    # Interfaces
    "Model",
    "Chat",
    "Service",
    "SupportsStreaming",
    "HistoryChat",
    "MessageStream",
    # Exceptions
    "ErrorCode",
    "ProviderError",
    "MissingPromptError",
    "ProviderUnavailableError",
    "TransportError",
    "UnknownProviderError",
    "ServiceArgumentError",
    # Factory
    "create",
    "ServiceFactory",
    "ServiceParams",
    # Logging
    "get_logger",
    "configure_logger",
]
