"""Service construction by backend key.

``ServiceFactory.create("ollama", host=...)`` resolves the key against a
registry of ``"module:Class"`` targets and imports the adapter module only
then, so an application that never asks for Gemini never imports
``google.generativeai``.

Nothing is retried or substituted. An unknown key or an adapter that fails to
import raises :class:`UnknownProviderError`; explicit arguments the service
does not accept raise :class:`ServiceArgumentError`. Common
``ServiceParams`` fields a service has no parameter for are skipped.
"""

from __future__ import annotations

import inspect
from importlib import import_module
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple

from .dto.service_params import ServiceParams


class UnknownProviderError(Exception):
    """A backend key could not be turned into a service class."""


class ServiceArgumentError(TypeError):
    """A known service rejected the constructor arguments it was given."""


class ServiceFactory:
    """Registry of the bundled backends."""

    _PROVIDERS: Dict[str, str] = {
        "openai": "common_ai.openai.client:OpenAIService",
        "gemini": "common_ai.gemini.client:GeminiService",
        "ollama": "common_ai.ollama.client:OllamaService",
        "mock": "common_ai.mock.client:MockService",
    }

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Backend keys in registration order."""
        return tuple(cls._PROVIDERS)

    @classmethod
    def _service_class(cls, provider: str) -> type:
        key = (provider or "").strip().lower()
        target = cls._PROVIDERS.get(key)
        if target is None:
            raise UnknownProviderError(
                f"Unknown provider '{provider}'; expected one of {', '.join(cls.supported())}"
            )
        module_name, _, attr = target.partition(":")
        try:
            return getattr(import_module(module_name), attr)
        except (ImportError, AttributeError) as exc:  # pragma: no cover - broken install
            raise UnknownProviderError(f"Cannot load '{target}' for provider '{key}': {exc}") from exc

    @classmethod
    def create(
        cls,
        provider: str,
        params: Optional[ServiceParams] = None,
        **kwargs: Any,
    ) -> Any:
        """Instantiate the service registered under ``provider``.

        ``params`` supplies typed settings; explicit ``kwargs`` override any
        field it also sets.

        Raises
        ------
        UnknownProviderError
            Unknown key or adapter import failure.
        ServiceArgumentError
            The service constructor rejected ``kwargs`` or ``params.extra``.
        """
        service_cls = cls._service_class(provider)
        arguments = cls._coerce_params(params, kwargs, _accepted_names(service_cls))
        try:
            return service_cls(**arguments)
        except TypeError as exc:
            raise ServiceArgumentError(
                f"Invalid arguments for '{provider}' service constructor: {exc}"
            ) from exc

    @staticmethod
    def _coerce_params(
        params: Optional[ServiceParams],
        kwargs: Mapping[str, Any],
        accepted: Optional[FrozenSet[str]] = None,
    ) -> Dict[str, Any]:
        base = params.to_kwargs(accepted) if params is not None else {}
        return {**base, **kwargs}


def _accepted_names(service_cls: type) -> Optional[FrozenSet[str]]:
    """Keyword names ``service_cls`` takes, or None when it accepts ``**kwargs``."""
    parameters = inspect.signature(service_cls).parameters.values()
    if any(p.kind is inspect.Parameter.VAR_KEYWORD for p in parameters):
        return None
    return frozenset(
        p.name
        for p in parameters
        if p.kind in (inspect.Parameter.POSITIONAL_OR_KEYWORD, inspect.Parameter.KEYWORD_ONLY)
    )


__all__ = ["ServiceFactory", "UnknownProviderError", "ServiceArgumentError"]
