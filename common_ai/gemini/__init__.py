"""Gemini adapter package."""

from .client import GeminiModel, GeminiService

__all__ = ["GeminiService", "GeminiModel"]
