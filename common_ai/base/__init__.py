"""
common_ai Base Package

Exports the provider-agnostic contracts shared by every adapter:
- Models: role-tagged turns, flattened messages, completions, catalog entries
- Interfaces: ``Model`` / ``Chat`` / ``Service`` / ``SupportsStreaming``
- Transcript: reconciliation of turns into instructions + history + prompt
- Streaming: the cumulative, cancellable ``MessageStream``
- Errors and the service factory
"""

from .cancellation import CancellationToken
from .chat_session import HistoryChat
from .dto import ServiceParams
from .errors import (
    ErrorCode,
    MissingPromptError,
    ProviderError,
    ProviderUnavailableError,
    TransportError,
    classify_exception,
    wrap_transport_error,
)
from .factory import ServiceArgumentError, ServiceFactory, UnknownProviderError
from .interfaces import Chat, Model, Service, SupportsStreaming
from .models import (
    Choice,
    Completion,
    Content,
    Message,
    ModelInfo,
    Part,
    Role,
    TextPart,
    Usage,
    new_completion_id,
)
from .streaming import MessageStream, StreamMetrics, normalize_stream
from .transcript import (
    Instructions,
    PromptContext,
    PromptEntry,
    ResponseEntry,
    Transcript,
    build_prompt_context,
)

__all__ = [
    # Models
    "Role",
    "Part",
    "TextPart",
    "Content",
    "Message",
    "Choice",
    "Usage",
    "Completion",
    "new_completion_id",
    "ModelInfo",
    # Interfaces
    "Model",
    "Chat",
    "Service",
    "SupportsStreaming",
    "HistoryChat",
    # Transcript
    "Instructions",
    "PromptEntry",
    "ResponseEntry",
    "Transcript",
    "PromptContext",
    "build_prompt_context",
    # Streaming
    "MessageStream",
    "StreamMetrics",
    "normalize_stream",
    "CancellationToken",
    # Errors
    "ErrorCode",
    "ProviderError",
    "MissingPromptError",
    "ProviderUnavailableError",
    "TransportError",
    "classify_exception",
    "wrap_transport_error",
    # Factory
    "ServiceFactory",
    "UnknownProviderError",
    "ServiceArgumentError",
    "ServiceParams",
]
