"""Wire translation helpers for the google-generativeai SDK.

``contents`` sent to ``GenerativeModel.generate_content`` are plain dicts
(``{"role": "user" | "model", "parts": [text]}``); instructions travel
separately as ``system_instruction``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..base.models import Choice, Completion, Message, ModelInfo, Role, Usage
from ..base.transcript import PromptContext, PromptEntry, ResponseEntry

PROVIDER_NAME = "gemini"

# Candidate parts are joined with a newline when a candidate carries several.
PART_SEPARATOR = "\n"


def to_gemini_contents(context: PromptContext) -> List[Dict[str, Any]]:
    """Render history entries plus the current prompt as Gemini ``contents``."""
    out: List[Dict[str, Any]] = []
    for entry in context.transcript.history:
        match entry:
            case PromptEntry(text=text):
                out.append({"role": "user", "parts": [text]})
            case ResponseEntry(text=text):
                out.append({"role": "model", "parts": [text]})
    out.append({"role": "user", "parts": [context.prompt]})
    return out


def _parts_text(candidate: Any) -> str:
    content = getattr(candidate, "content", None)
    parts = getattr(content, "parts", None) or []
    texts = [t for t in (getattr(p, "text", None) for p in parts) if isinstance(t, str)]
    return PART_SEPARATOR.join(texts)


def _finish_reason(candidate: Any) -> Optional[str]:
    reason = getattr(candidate, "finish_reason", None)
    if reason is None:
        return None
    name = getattr(reason, "name", None)
    return name if isinstance(name, str) else str(reason)


def _response_text(resp: Any) -> str:
    # ``response.text`` raises ValueError when the response has no text parts.
    try:
        text = resp.text
    except ValueError:
        return ""
    return text or ""


def translate_chunk(chunk: Any) -> Optional[str]:
    """Return the text delta carried by a streamed response chunk."""
    candidates = getattr(chunk, "candidates", None)
    if candidates:
        return _parts_text(candidates[0]) or None
    return _response_text(chunk) or None


def decode_usage(raw: Any) -> Optional[Usage]:
    if raw is None:
        return None
    return Usage(
        prompt_tokens=getattr(raw, "prompt_token_count", None),
        completion_tokens=getattr(raw, "candidates_token_count", None),
        total_tokens=getattr(raw, "total_token_count", None),
    )


def decode_completion(resp: Any, model: str) -> Completion:
    """Map a ``GenerateContentResponse`` onto :class:`Completion`.

    Without candidates, a single choice is built from ``response.text``.
    """
    choices = [
        Choice(
            index=position,
            message=Message(role=Role.MODEL, text=_parts_text(candidate)),
            finish_reason=_finish_reason(candidate),
        )
        for position, candidate in enumerate(getattr(resp, "candidates", None) or [])
    ]
    if not choices:
        choices = [Choice(index=0, message=Message(role=Role.MODEL, text=_response_text(resp)))]
    return Completion.create(
        model=model,
        choices=choices,
        usage=decode_usage(getattr(resp, "usage_metadata", None)),
        metadata={"provider": PROVIDER_NAME},
    )


def decode_model_info(raw: Any) -> ModelInfo:
    """Map an entry of ``genai.list_models()`` to :class:`ModelInfo`."""
    return ModelInfo(
        name=str(getattr(raw, "name")),
        display_name=getattr(raw, "display_name", None),
        description=getattr(raw, "description", None),
        input_token_limit=getattr(raw, "input_token_limit", None),
        output_token_limit=getattr(raw, "output_token_limit", None),
    )


__all__ = [
    "PROVIDER_NAME",
    "to_gemini_contents",
    "translate_chunk",
    "decode_usage",
    "decode_completion",
    "decode_model_info",
]
