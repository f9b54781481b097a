"""Ollama adapter package."""

from .client import OllamaModel, OllamaService

__all__ = ["OllamaService", "OllamaModel"]
