"""Unit tests for the Gemini service adapter.

These tests stub the google-generativeai SDK to avoid network calls. All
tests rely on monkeypatching the module-level ``genai`` in
``common_ai.gemini.client``.
"""
from __future__ import annotations

import types
from typing import Any, Dict, List

import pytest

from common_ai.base.errors import ErrorCode, TransportError
from common_ai.base.models import Content, Usage
from common_ai.gemini import GeminiService


class _Part:
    def __init__(self, text: str) -> None:
        self.text = text


class _Candidate:
    def __init__(self, *texts: str, finish: str = "STOP") -> None:
        self.content = types.SimpleNamespace(parts=[_Part(t) for t in texts])
        self.finish_reason = types.SimpleNamespace(name=finish)


class _Response:
    """Fake ``GenerateContentResponse``; ``text`` raises without parts like the SDK."""

    def __init__(self, candidates: List[_Candidate], text: str | None = None, usage: Any = None) -> None:
        self.candidates = candidates
        self._text = text
        self.usage_metadata = usage

    @property
    def text(self) -> str:
        if self._text is None:
            raise ValueError("no text parts")
        return self._text


class _FakeGenerativeModel:
    """Fake GenerativeModel implementing only what the adapter uses."""

    def __init__(self, sdk: "_FakeSDK", *, model_name: str, system_instruction: str | None = None) -> None:
        self._sdk = sdk
        sdk.models_built.append({"model_name": model_name, "system_instruction": system_instruction})

    def generate_content(self, contents: List[Dict[str, Any]], stream: bool = False):
        self._sdk.requests.append({"contents": contents, "stream": stream})
        if self._sdk.error is not None:
            raise self._sdk.error
        if stream:
            return [_Response([_Candidate(t)]) for t in self._sdk.stream_chunks]
        return self._sdk.response


class _FakeSDK(types.SimpleNamespace):
    def __init__(self) -> None:
        super().__init__()
        self.configured: List[str] = []
        self.models_built: List[Dict[str, Any]] = []
        self.requests: List[Dict[str, Any]] = []
        self.response: Any = _Response([_Candidate("ok")])
        self.stream_chunks: List[str] = []
        self.error: Exception | None = None
        self.catalog: List[Any] = []
        self.list_calls: List[Dict[str, Any]] = []

    def configure(self, *, api_key: str) -> None:
        self.configured.append(api_key)

    def GenerativeModel(self, **kwargs: Any) -> _FakeGenerativeModel:  # noqa: N802 - mirrors SDK name
        return _FakeGenerativeModel(self, **kwargs)

    def list_models(self, **kwargs: Any):
        self.list_calls.append(kwargs)
        return iter(self.catalog)


@pytest.fixture()
def fake_genai(monkeypatch: pytest.MonkeyPatch) -> _FakeSDK:
    """Replace ``gemini.client.genai`` with a minimal fake SDK module."""
    fake = _FakeSDK()
    monkeypatch.setattr("common_ai.gemini.client.genai", fake)
    return fake


def test_instructions_become_system_instruction(fake_genai) -> None:
    svc = GeminiService(api_key="g-key")
    svc.model("gemini-test").complete(
        [
            Content.system("Be terse."),
            Content.user("Hello."),
            Content.model("Hi there!"),
            Content.user("Give three points."),
        ]
    )
    assert fake_genai.configured == ["g-key"]  # nosec B101 - pytest assertion in tests
    assert fake_genai.models_built == [  # nosec B101 - pytest assertion in tests
        {"model_name": "gemini-test", "system_instruction": "Be terse."}
    ]
    assert fake_genai.requests[0]["contents"] == [  # nosec B101 - pytest assertion in tests
        {"role": "user", "parts": ["Hello."]},
        {"role": "model", "parts": ["Hi there!"]},
        {"role": "user", "parts": ["Give three points."]},
    ]


def test_candidates_map_to_choices_with_usage(fake_genai) -> None:
    usage = types.SimpleNamespace(prompt_token_count=4, candidates_token_count=3, total_token_count=7)
    fake_genai.response = _Response([_Candidate("a", "b"), _Candidate("c", finish="MAX_TOKENS")], usage=usage)
    comp = GeminiService(api_key="k").model("g").complete([Content.user("q")])
    assert [c.message.text for c in comp.choices] == ["a\nb", "c"]  # nosec B101
    assert [c.finish_reason for c in comp.choices] == ["STOP", "MAX_TOKENS"]  # nosec B101
    assert comp.usage == Usage(4, 3, 7)  # nosec B101 - pytest assertion in tests
    assert comp.metadata == {"provider": "gemini"}  # nosec B101 - pytest assertion in tests


def test_no_candidates_falls_back_to_response_text(fake_genai) -> None:
    fake_genai.response = _Response([], text="fallback")
    assert GeminiService(api_key="k").model("g").generate_text("q").text == "fallback"  # nosec B101
    fake_genai.response = _Response([], text=None)
    assert GeminiService(api_key="k").model("g").generate_text("q").text == ""  # nosec B101


def test_stream_accumulates_chunk_text(fake_genai) -> None:
    fake_genai.stream_chunks = ["alpha", "", "beta"]
    chat = GeminiService(api_key="k").model("g").start_chat()
    texts = [m.text for m in chat.send_stream([Content.user("go")])]
    assert texts == ["alpha", "alphabeta"]  # nosec B101 - pytest assertion in tests
    assert fake_genai.requests[0]["stream"] is True  # nosec B101 - pytest assertion in tests
    assert chat.history[-1] == Content.model("alphabeta")  # nosec B101


def test_sdk_errors_are_wrapped(fake_genai) -> None:
    fake_genai.error = RuntimeError("API key not valid")
    with pytest.raises(TransportError) as info:
        GeminiService(api_key="bad").model("g").generate_text("q")
    assert info.value.code is ErrorCode.AUTH  # nosec B101 - pytest assertion in tests


def test_list_models_maps_metadata_and_truncates(fake_genai) -> None:
    fake_genai.catalog = [
        types.SimpleNamespace(
            name=f"models/g-{i}",
            display_name=f"G {i}",
            description="desc",
            input_token_limit=1000,
            output_token_limit=100,
        )
        for i in range(5)
    ]
    svc = GeminiService(api_key="k")
    assert len(svc.list_models()) == 5  # nosec B101 - pytest assertion in tests
    page = svc.list_models(page_size=2)
    assert [m.name for m in page] == ["models/g-0", "models/g-1"]  # nosec B101
    assert page[0].display_name == "G 0" and page[0].input_token_limit == 1000  # nosec B101
    assert fake_genai.list_calls == [{}, {"page_size": 2}]  # nosec B101 - pytest assertion in tests


def test_api_key_falls_back_to_google_api_key(monkeypatch, fake_genai) -> None:
    monkeypatch.setenv("GOOGLE_API_KEY", "google-env")
    svc = GeminiService()
    assert svc.api_key == "google-env"  # nosec B101 - pytest assertion in tests
    svc.model("g").generate_text("q")
    svc.model("g").generate_text("again")
    assert fake_genai.configured == ["google-env"]  # nosec B101 - configured once
