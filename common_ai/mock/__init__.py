"""Deterministic mock adapter package."""

from .client import DEFAULT_CATALOG, MockModel, MockResponse, MockService

__all__ = ["MockService", "MockModel", "MockResponse", "DEFAULT_CATALOG"]
