"""HTTP helpers for adapters that talk to a daemon directly."""

from .client import ServiceHttpClient

__all__ = ["ServiceHttpClient"]
