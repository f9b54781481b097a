"""Mock backend tests: response table, echo model, catalog paging, failures."""
from __future__ import annotations

import pytest

from common_ai.base.errors import ErrorCode, ProviderError, TransportError
from common_ai.base.models import Content, ModelInfo
from common_ai.mock import DEFAULT_CATALOG, MockService


def test_response_table_falls_back_to_wildcard(mock_service):
    model = mock_service.model()
    assert model.name == "mock-1"  # nosec B101 - pytest assertion in tests
    assert model.generate_text("Hello.").text == "Hi there!"  # nosec B101
    assert model.generate_text("anything else").text == "default answer"  # nosec B101
    assert MockService().model().generate_text("x").text == ""  # nosec B101 - empty table


def test_usage_counts_words():
    comp = MockService(responses={"*": "one two three"}).model().complete_text("a b")
    assert (comp.usage.prompt_tokens, comp.usage.completion_tokens, comp.usage.total_tokens) == (2, 3, 5)  # nosec B101
    assert comp.metadata == {"provider": "mock"}  # nosec B101 - pytest assertion in tests


def test_multiple_choices_and_empty_choices():
    svc = MockService(responses={"many": {"choices": ["a", "b"]}, "none": {"choices": []}})
    comp = svc.model().complete_text("many")
    assert [c.message.text for c in comp.choices] == ["a", "b"]  # nosec B101
    empty = svc.model().complete_text("none")
    assert empty.choices == () and empty.primary_message.text == ""  # nosec B101


def test_echo_model_returns_prompt():
    svc = MockService()
    assert svc.model("mock-echo").generate_text("ping").text == "ping"  # nosec B101


def test_calls_record_reconciled_contexts(mock_service):
    mock_service.model().complete(
        [Content.system("rules"), Content.user("Hello."), Content.model("Hi"), Content.user("Give three points.")]
    )
    (context,) = mock_service.calls
    assert context.prompt == "Give three points."  # nosec B101 - pytest assertion in tests
    assert context.transcript.instructions == "rules"  # nosec B101 - pytest assertion in tests
    assert len(context.transcript.history) == 2  # nosec B101 - pytest assertion in tests


def test_snapshot_mode_yields_growing_text():
    svc = MockService(responses={"*": "abcdefgh"}, stream_mode="snapshot", chunk_size=3)
    texts = [m.text for m in svc.model().stream([Content.user("go")])]
    assert texts == ["abc", "abcdef", "abcdefgh"]  # nosec B101 - pytest assertion in tests


def test_explicit_snapshot_chunks_skip_non_growing_entries():
    svc = MockService(responses={"*": {"text": "", "stream": ["He", "He", "Hello", "Hell"]}}, stream_mode="snapshot")
    assert [m.text for m in svc.model().stream([Content.user("go")])] == ["He", "Hello"]  # nosec B101


def test_fail_after_raises_mid_stream():
    svc = MockService(responses={"*": "abcdef"}, chunk_size=2, fail_with=RuntimeError("server error"), fail_after=2)
    seen = []
    with pytest.raises(TransportError) as info:
        for message in svc.model().stream([Content.user("go")]):
            seen.append(message.text)
    assert seen == ["ab", "abcd"]  # nosec B101 - pytest assertion in tests
    assert info.value.code is ErrorCode.SERVER_ERROR  # nosec B101 - pytest assertion in tests


def test_provider_errors_pass_through_unchanged():
    boom = ProviderError(code=ErrorCode.VALIDATION, message="bad", provider="mock")
    with pytest.raises(ProviderError) as info:
        MockService(fail_with=boom).model().generate_text("x")
    assert info.value is boom  # nosec B101 - pytest assertion in tests


def test_list_models_paging():
    svc = MockService()
    assert svc.list_models() == list(DEFAULT_CATALOG)  # nosec B101 - pytest assertion in tests
    assert [m.id for m in svc.list_models(page_size=2)] == ["mock-1", "mock-echo"]  # nosec B101
    assert svc.list_models(page_size=0) == []  # nosec B101 - pytest assertion in tests
    custom = MockService(models=[ModelInfo(name="only")])
    assert [m.name for m in custom.list_models(page_size=10)] == ["only"]  # nosec B101


def test_invalid_chunk_size_rejected():
    with pytest.raises(ValueError):
        MockService(chunk_size=0)
