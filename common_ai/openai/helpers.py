"""Wire translation helpers for the OpenAI chat-completions API."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..base.models import Choice, Completion, Message, ModelInfo, Role, Usage
from ..base.transcript import PromptContext

PROVIDER_NAME = "openai"


def to_chat_messages(context: PromptContext) -> List[Dict[str, str]]:
    """Render a reconciled prompt context as chat-completions messages."""
    return [{"role": role, "content": text} for role, text in context.to_messages()]


def translate_delta(chunk: Any) -> Optional[str]:
    """Return the text delta carried by a streaming chunk, if any."""
    choices = getattr(chunk, "choices", None)
    if not choices:
        return None
    delta = getattr(choices[0], "delta", None)
    return getattr(delta, "content", None) if delta is not None else None


def decode_usage(raw: Any) -> Optional[Usage]:
    if raw is None:
        return None
    return Usage(
        prompt_tokens=getattr(raw, "prompt_tokens", None),
        completion_tokens=getattr(raw, "completion_tokens", None),
        total_tokens=getattr(raw, "total_tokens", None),
    )


def decode_completion(resp: Any, model: str) -> Completion:
    """Map a ``ChatCompletion`` response onto :class:`Completion`.

    Each backend choice keeps its index and finish reason; missing content
    decodes to an empty string.
    """
    choices = []
    for position, raw in enumerate(getattr(resp, "choices", None) or []):
        message = getattr(raw, "message", None)
        text = getattr(message, "content", None) or ""
        index = getattr(raw, "index", None)
        choices.append(
            Choice(
                index=index if isinstance(index, int) else position,
                message=Message(role=Role.MODEL, text=text),
                finish_reason=getattr(raw, "finish_reason", None),
            )
        )
    return Completion.create(
        model=model,
        choices=choices,
        usage=decode_usage(getattr(resp, "usage", None)),
        metadata={"provider": PROVIDER_NAME},
    )


def decode_model_info(raw: Any) -> ModelInfo:
    """Map an entry of ``client.models.list()`` to :class:`ModelInfo`."""
    owner = getattr(raw, "owned_by", None)
    return ModelInfo(
        name=str(getattr(raw, "id")),
        description=f"owned by {owner}" if owner else None,
    )


__all__ = [
    "PROVIDER_NAME",
    "to_chat_messages",
    "translate_delta",
    "decode_usage",
    "decode_completion",
    "decode_model_info",
]
