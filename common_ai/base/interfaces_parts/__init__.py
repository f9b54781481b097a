"""Single-class Protocol modules re-exported by ``common_ai.base.interfaces``."""

from .chat import Chat
from .model import Model
from .service import Service
from .supports_streaming import SupportsStreaming

__all__ = ["Model", "Chat", "Service", "SupportsStreaming"]
