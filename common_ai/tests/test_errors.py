"""Error taxonomy and classification tests."""
from __future__ import annotations

import httpx
import pytest

from common_ai.base.errors import (
    ErrorCode,
    MissingPromptError,
    ProviderError,
    ProviderUnavailableError,
    TransportError,
    classify_exception,
    wrap_transport_error,
)


class _StatusError(Exception):
    def __init__(self, status_code: int, message: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code


@pytest.mark.parametrize(
    "status, code",
    [
        (400, ErrorCode.VALIDATION),
        (401, ErrorCode.AUTH),
        (404, ErrorCode.NOT_FOUND),
        (429, ErrorCode.RATE_LIMIT),
        (500, ErrorCode.SERVER_ERROR),
        (503, ErrorCode.UNAVAILABLE),
    ],
)
def test_http_status_mapping(status: int, code: ErrorCode) -> None:
    assert classify_exception(_StatusError(status)) is code  # nosec B101 - pytest assertion in tests


def test_status_on_nested_response() -> None:
    request = httpx.Request("POST", "http://localhost/api/chat")
    response = httpx.Response(429, request=request)
    exc = httpx.HTTPStatusError("too many", request=request, response=response)
    assert classify_exception(exc) is ErrorCode.RATE_LIMIT  # nosec B101 - pytest assertion in tests


@pytest.mark.parametrize(
    "message, code",
    [
        ("Rate limit exceeded", ErrorCode.RATE_LIMIT),
        ("request timed out", ErrorCode.TIMEOUT),
        ("Invalid API key provided", ErrorCode.AUTH),
        ("model does not exist", ErrorCode.NOT_FOUND),
        ("something odd", ErrorCode.UNKNOWN),
    ],
)
def test_message_heuristics(message: str, code: ErrorCode) -> None:
    assert classify_exception(RuntimeError(message)) is code  # nosec B101


def test_timeout_precedes_status() -> None:
    exc = TimeoutError("slow")
    exc.status_code = 500  # type: ignore[attr-defined]
    assert classify_exception(exc) is ErrorCode.TIMEOUT  # nosec B101 - pytest assertion in tests


def test_provider_error_code_passes_through() -> None:
    err = ProviderUnavailableError("daemon down", provider="ollama")
    assert classify_exception(err) is ErrorCode.UNAVAILABLE  # nosec B101 - pytest assertion in tests
    assert wrap_transport_error(err, provider="x") is err  # nosec B101 - pytest assertion in tests


def test_wrap_transport_error_keeps_original() -> None:
    original = ConnectionError("connection refused")
    err = wrap_transport_error(original, provider="openai", model="gpt")
    assert isinstance(err, TransportError)  # nosec B101 - pytest assertion in tests
    assert err.raw is original and err.message == "connection refused"  # nosec B101
    assert (err.provider, err.model) == ("openai", "gpt")  # nosec B101 - pytest assertion in tests


def test_retryable_hint_follows_code() -> None:
    assert TransportError("x", code=ErrorCode.RATE_LIMIT).retryable is True  # nosec B101
    assert TransportError("x", code=ErrorCode.AUTH).retryable is False  # nosec B101


def test_error_messages() -> None:
    assert MissingPromptError().message == "No user message found to generate a response."  # nosec B101
    unavailable = ProviderUnavailableError("model not downloaded", provider="ollama", model="llama")
    assert unavailable.reason == "model not downloaded"  # nosec B101 - pytest assertion in tests
    assert str(unavailable) == "[unavailable] ollama/llama: model unavailable: model not downloaded"  # nosec B101
    assert isinstance(unavailable, ProviderError)  # nosec B101 - pytest assertion in tests
