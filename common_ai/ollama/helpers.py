"""Ollama adapter helpers.

Purpose
-------
- Wire translation for the local daemon's ``/api/chat`` and ``/api/tags``
  endpoints.
- Map daemon-level failures (unreachable host, model not pulled) onto
  :class:`ProviderUnavailableError` with the daemon's reason.
- Decode NDJSON stream bodies line by line.

External dependencies
---------------------
- ``httpx`` through the service-owned client in ``common_ai.base.http``. No SDK or API
  key is required for Ollama.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

import httpx

from ..base.errors import ErrorCode, ProviderUnavailableError, TransportError
from ..base.logging import LogContext, log_event
from ..base.models import Choice, Completion, Message, ModelInfo, Role, Usage
from ..base.transcript import PromptContext

PROVIDER_NAME = "ollama"
CHAT_PATH = "/api/chat"
TAGS_PATH = "/api/tags"


def to_ollama_messages(context: PromptContext) -> List[Dict[str, str]]:
    """Render a reconciled prompt context as Ollama chat messages."""
    return [{"role": role, "content": text} for role, text in context.to_messages()]


def build_chat_payload(*, model: str, messages: List[Dict[str, str]], stream: bool) -> Dict[str, Any]:
    """Construct the JSON payload for ``POST /api/chat``."""
    return {"model": model, "messages": messages, "stream": stream}


def _error_text(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.text
    if isinstance(data, dict) and isinstance(data.get("error"), str):
        return data["error"]
    return resp.text


def check_response(resp: httpx.Response, *, model: Optional[str]) -> None:
    """Raise for a failed daemon response.

    A 404 naming a missing model means the model is not available locally and
    becomes :class:`ProviderUnavailableError`; any other failure status raises
    ``httpx.HTTPStatusError`` for the caller to classify.
    """
    if resp.status_code == 404:
        reason = _error_text(resp)
        if "not found" in reason.lower():
            raise ProviderUnavailableError(reason, provider=PROVIDER_NAME, model=model)
    resp.raise_for_status()


@contextmanager
def daemon_errors(host: str, *, model: Optional[str] = None) -> Iterator[None]:
    """Translate connection failures into :class:`ProviderUnavailableError`."""
    try:
        yield
    except httpx.ConnectError as exc:
        raise ProviderUnavailableError(
            f"ollama daemon unreachable at {host}",
            provider=PROVIDER_NAME,
            model=model,
            raw=exc,
        ) from exc


def iter_ndjson(
    resp: httpx.Response,
    *,
    logger: logging.Logger,
    ctx: LogContext,
    model: Optional[str],
) -> Iterator[Dict[str, Any]]:
    """Yield decoded NDJSON objects; undecodable lines are logged and skipped.

    Raises
    ------
    TransportError
        When the daemon reports an ``error`` object mid-stream.
    """
    for line in resp.iter_lines():
        if not line:
            continue
        try:
            obj = json.loads(line)
        except json.JSONDecodeError as exc:
            log_event(logger, "stream.decode_error", ctx, level=logging.WARNING, error=str(exc), length=len(line))
            continue
        if isinstance(obj, dict) and obj.get("error"):
            raise TransportError(
                str(obj["error"]),
                provider=PROVIDER_NAME,
                model=model,
                code=ErrorCode.SERVER_ERROR,
            )
        yield obj


def translate_chunk(obj: Any) -> Optional[str]:
    """Return the assistant text delta from one ``/api/chat`` stream object."""
    if not isinstance(obj, dict):
        return None
    message = obj.get("message")
    if not isinstance(message, dict):
        return None
    return message.get("content") or None


def decode_usage(data: Dict[str, Any]) -> Optional[Usage]:
    prompt = data.get("prompt_eval_count")
    completion = data.get("eval_count")
    if prompt is None and completion is None:
        return None
    total = (prompt or 0) + (completion or 0)
    return Usage(prompt_tokens=prompt, completion_tokens=completion, total_tokens=total)


def decode_completion(data: Dict[str, Any], model: str) -> Completion:
    """Map a non-streaming ``/api/chat`` body onto :class:`Completion`."""
    message = data.get("message") or {}
    text = (message.get("content") or "") if isinstance(message, dict) else ""
    choice = Choice(
        index=0,
        message=Message(role=Role.MODEL, text=text),
        finish_reason=data.get("done_reason"),
    )
    return Completion.create(
        model=model,
        choices=[choice],
        usage=decode_usage(data),
        metadata={"provider": PROVIDER_NAME},
    )


def decode_model_info(entry: Dict[str, Any]) -> ModelInfo:
    """Map one ``/api/tags`` entry to :class:`ModelInfo`."""
    details = entry.get("details") or {}
    family = details.get("family")
    size = details.get("parameter_size")
    description = " ".join(p for p in (family, size) if p) or None
    name = entry.get("name") or entry.get("model")
    return ModelInfo(name=str(name), display_name=entry.get("model"), description=description)


__all__ = [
    "PROVIDER_NAME",
    "CHAT_PATH",
    "TAGS_PATH",
    "to_ollama_messages",
    "build_chat_payload",
    "check_response",
    "daemon_errors",
    "iter_ndjson",
    "translate_chunk",
    "decode_usage",
    "decode_completion",
    "decode_model_info",
]
