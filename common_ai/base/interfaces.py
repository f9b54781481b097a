"""
Provider-agnostic capability interfaces.

This module re-exports Protocols split into single-class modules under
``common_ai.base.interfaces_parts`` while keeping one stable import path.
"""

from __future__ import annotations

from .interfaces_parts import Chat, Model, Service, SupportsStreaming

__all__ = ["Model", "Chat", "Service", "SupportsStreaming"]
