"""OpenAI chat-completions wire format (also used by OpenAI-compatible APIs).

Request body::

    {"model": api_name,
     "messages": [{"role": ..., "content": str | [parts]}],
     "temperature"?, "max_tokens"?, "frequency_penalty"?}

Image parts are sent as ``{"type": "image_url", "image_url": {"url": <data URL>}}``.

Response fields read: ``choices[].message.content`` (ordered by ``index``),
``usage.prompt_tokens``, ``usage.completion_tokens``, ``id``.

Authentication: ``Authorization: Bearer <key>``, omitted when the key is empty
(local servers such as Ollama need none).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel

from ..base.models_parts.chat_response import ChatResponse, TokenUsage
from ..base.models_parts.message import Message
from ..base.models_parts.sampling import SamplingParams


def _content(message: Message) -> Any:
    if not message.is_structured():
        return message.content
    parts: List[Dict[str, Any]] = []
    for p in message.parts():
        if p.type == "image":
            parts.append({"type": "image_url", "image_url": {"url": p.data_url()}})
        else:
            parts.append({"type": "text", "text": p.text or ""})
    return parts


def build_payload(api_name: str, messages: Sequence[Message], params: SamplingParams) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "model": api_name,
        "messages": [{"role": m.role, "content": _content(m)} for m in messages],
    }
    payload.update(params.present("temperature", "max_tokens", "frequency_penalty"))
    return payload


def build_headers(api_key: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {api_key}"} if api_key else {}


class OpenAiMessage(BaseModel):
    role: Optional[str] = None
    content: Optional[str] = None


class OpenAiChoice(BaseModel):
    index: int = 0
    message: OpenAiMessage
    finish_reason: Optional[str] = None


class OpenAiUsage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: Optional[int] = None


class OpenAiResponse(BaseModel):
    id: Optional[str] = None
    model: Optional[str] = None
    choices: List[OpenAiChoice]
    usage: Optional[OpenAiUsage] = None

    def to_chat_response(self) -> ChatResponse:
        choices = sorted(self.choices, key=lambda c: c.index)
        usage = self.usage or OpenAiUsage()
        return ChatResponse(
            messages=[c.message.content or "" for c in choices],
            usage=TokenUsage(input_tokens=usage.prompt_tokens, output_tokens=usage.completion_tokens),
        )


def parse(raw_body: str) -> tuple[ChatResponse, Optional[str]]:
    """Deserialize a response body; returns the normalized response and its id.

    Raises ``pydantic.ValidationError`` on malformed JSON or schema mismatch.
    """
    parsed = OpenAiResponse.model_validate_json(raw_body)
    return parsed.to_chat_response(), parsed.id


__all__ = ["build_payload", "build_headers", "parse", "OpenAiResponse"]
