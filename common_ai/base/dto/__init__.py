"""Typed DTOs shared across the service boundary."""

from .service_params import ServiceParams

__all__ = ["ServiceParams"]
