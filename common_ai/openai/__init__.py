"""OpenAI adapter package."""

from .client import OpenAIModel, OpenAIService

__all__ = ["OpenAIService", "OpenAIModel"]
