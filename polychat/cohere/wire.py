"""Cohere v2 chat wire format.

Request body::

    {"model": api_name,
     "messages": [{"role": ..., "content": str | [parts]}],
     "temperature"?, "max_tokens"?, "frequency_penalty"?}

Image parts are sent as ``{"type": "image_url", "image_url": {"url": <data URL>}}``.

Response fields read: ``message.content[]`` text items (one choice per item),
``usage.tokens`` (falling back to ``usage.billed_units``) ``input_tokens`` /
``output_tokens``, ``id``. Cohere reports token counts as numbers that may be
floats; they are truncated to integers.

Authentication: ``Authorization: Bearer <key>``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

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
    return {"Authorization": f"Bearer {api_key}", "Accept": "application/json"}


class CohereContent(BaseModel):
    type: str
    text: Optional[str] = None


class CohereMessage(BaseModel):
    role: Optional[str] = None
    content: List[CohereContent] = Field(default_factory=list)


class CohereTokens(BaseModel):
    input_tokens: float = 0
    output_tokens: float = 0


class CohereUsage(BaseModel):
    billed_units: Optional[CohereTokens] = None
    tokens: Optional[CohereTokens] = None


class CohereResponse(BaseModel):
    id: Optional[str] = None
    finish_reason: Optional[str] = None
    message: CohereMessage
    usage: Optional[CohereUsage] = None

    def to_chat_response(self) -> ChatResponse:
        counts = CohereTokens()
        if self.usage is not None:
            counts = self.usage.tokens or self.usage.billed_units or counts
        return ChatResponse(
            messages=[c.text or "" for c in self.message.content if c.type == "text"],
            usage=TokenUsage(input_tokens=int(counts.input_tokens), output_tokens=int(counts.output_tokens)),
        )


def parse(raw_body: str) -> tuple[ChatResponse, Optional[str]]:
    """Deserialize a response body; returns the normalized response and its id."""
    parsed = CohereResponse.model_validate_json(raw_body)
    return parsed.to_chat_response(), parsed.id


__all__ = ["build_payload", "build_headers", "parse", "CohereResponse"]
