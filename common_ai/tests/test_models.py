"""Tests for the canonical conversational data model."""
from __future__ import annotations

import dataclasses
import json

import pytest

from common_ai.base.models import (
    Choice,
    Completion,
    Content,
    Message,
    ModelInfo,
    Role,
    TextPart,
    Usage,
    new_completion_id,
    part_from_dict,
)


@pytest.mark.parametrize(
    "factory, role",
    [(Content.user, Role.USER), (Content.model, Role.MODEL), (Content.system, Role.SYSTEM)],
)
def test_convenience_constructors_produce_single_text_part(factory, role) -> None:
    """Each role constructor wraps the text in exactly one TextPart."""
    c = factory("hello")
    assert c.role is role  # nosec B101 - pytest assertion in tests
    assert c.parts == (TextPart("hello"),)  # nosec B101 - pytest assertion in tests


def test_content_is_immutable_and_structurally_equal() -> None:
    """Equal role and parts compare equal and hash alike; fields cannot be reassigned."""
    a = Content.user("x")
    b = Content(role="user", parts=[TextPart("x")])
    assert a == b  # nosec B101 - pytest assertion in tests
    assert hash(a) == hash(b)  # nosec B101 - pytest assertion in tests
    with pytest.raises(dataclasses.FrozenInstanceError):
        a.role = Role.MODEL  # type: ignore[misc]


def test_joined_text_concatenates_without_separator() -> None:
    c = Content(role=Role.USER, parts=(TextPart("ab"), TextPart("cd")))
    assert c.joined_text() == "abcd"  # nosec B101 - pytest assertion in tests


def test_content_encoding_uses_role_value_and_tagged_parts() -> None:
    """to_dict is JSON-serializable and from_dict restores an equal value."""
    c = Content.system("Be terse.")
    data = c.to_dict()
    assert data == {"role": "system", "parts": [{"type": "text", "text": "Be terse."}]}  # nosec B101
    assert Content.from_dict(json.loads(json.dumps(data))) == c  # nosec B101 - pytest assertion in tests


def test_unknown_part_type_is_rejected() -> None:
    with pytest.raises(ValueError):
        part_from_dict({"type": "image", "data": "..."})


def test_primary_message_defaults_to_empty_model_message() -> None:
    """A completion without choices yields an empty model message instead of raising."""
    comp = Completion.create(model="m", choices=[])
    assert comp.primary_message == Message(role=Role.MODEL, text="")  # nosec B101


def test_primary_message_is_first_choice() -> None:
    first = Message(Role.MODEL, "first")
    comp = Completion.create(
        model="m",
        choices=[Choice(0, first, "stop"), Choice(1, Message(Role.MODEL, "second"))],
    )
    assert comp.primary_message is first  # nosec B101 - pytest assertion in tests


def test_completion_ids_are_unique_and_prefixed() -> None:
    ids = {new_completion_id() for _ in range(200)}
    assert len(ids) == 200  # nosec B101 - pytest assertion in tests
    assert all(i.startswith("cai-") and i == i.lower() for i in ids)  # nosec B101


def test_completion_create_stamps_metadata_and_defaults() -> None:
    comp = Completion.create(
        model="m",
        choices=[Choice(0, Message(Role.MODEL, "ok"))],
        usage=Usage(prompt_tokens=3),
        metadata={"provider": "mock"},
    )
    assert comp.object == "chat.completion"  # nosec B101 - pytest assertion in tests
    assert comp.created > 0  # nosec B101 - pytest assertion in tests
    assert comp.usage == Usage(prompt_tokens=3)  # nosec B101 - pytest assertion in tests
    data = comp.to_dict()
    assert data["metadata"] == {"provider": "mock"}  # nosec B101 - pytest assertion in tests
    assert data["usage"] == {"prompt_tokens": 3, "completion_tokens": None, "total_tokens": None}  # nosec B101
    assert Completion.from_dict(data) == comp  # nosec B101 - pytest assertion in tests


def test_model_info_id_aliases_name() -> None:
    info = ModelInfo(name="gpt-x", display_name="GPT X")
    assert info.id == "gpt-x"  # nosec B101 - pytest assertion in tests
    assert info.to_dict()["input_token_limit"] is None  # nosec B101 - pytest assertion in tests


def test_role_rejects_unknown_values() -> None:
    with pytest.raises(ValueError):
        Role("assistant")
