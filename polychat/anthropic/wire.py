"""Anthropic Messages API wire format.

Request body::

    {"model": api_name, "max_tokens": int, "system"?: str,
     "messages": [{"role": "user" | "assistant", "content": str | [blocks]}],
     "temperature"?}

System messages are lifted out of the list and joined into the top-level
``system`` field. ``max_tokens`` is mandatory for this API, so
``ANTHROPIC_DEFAULT_MAX_TOKENS`` is sent when the caller did not supply one.
``frequency_penalty`` is not part of the API and is never sent.

Image parts become ``{"type": "image", "source": {"type": "base64",
"media_type": ..., "data": ...}}`` blocks.

Response fields read: ``content[]`` text blocks (one choice per block),
``usage.input_tokens``, ``usage.output_tokens``, ``id``.

Authentication: ``x-api-key`` plus ``anthropic-version``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel

from ..base.models_parts.chat_response import ChatResponse, TokenUsage
from ..base.models_parts.message import Message
from ..base.models_parts.sampling import SamplingParams
from ..config.defaults import ANTHROPIC_API_VERSION, ANTHROPIC_DEFAULT_MAX_TOKENS


def _content(message: Message) -> Any:
    if not message.is_structured():
        return message.content
    blocks: List[Dict[str, Any]] = []
    for p in message.parts():
        if p.type == "image":
            blocks.append(
                {
                    "type": "image",
                    "source": {"type": "base64", "media_type": p.media_type, "data": p.data},
                }
            )
        else:
            blocks.append({"type": "text", "text": p.text or ""})
    return blocks


def build_payload(api_name: str, messages: Sequence[Message], params: SamplingParams) -> Dict[str, Any]:
    system = [m.text_or_joined() for m in messages if m.role == "system"]
    payload: Dict[str, Any] = {
        "model": api_name,
        "max_tokens": params.max_tokens if params.max_tokens is not None else ANTHROPIC_DEFAULT_MAX_TOKENS,
        "messages": [{"role": m.role, "content": _content(m)} for m in messages if m.role != "system"],
    }
    if system:
        payload["system"] = "\n\n".join(system)
    payload.update(params.present("temperature"))
    return payload


def build_headers(api_key: str) -> Dict[str, str]:
    return {"x-api-key": api_key, "anthropic-version": ANTHROPIC_API_VERSION}


class AnthropicContentBlock(BaseModel):
    type: str
    text: Optional[str] = None


class AnthropicUsage(BaseModel):
    input_tokens: int = 0
    output_tokens: int = 0


class AnthropicResponse(BaseModel):
    id: Optional[str] = None
    model: Optional[str] = None
    content: List[AnthropicContentBlock]
    stop_reason: Optional[str] = None
    usage: AnthropicUsage

    def to_chat_response(self) -> ChatResponse:
        return ChatResponse(
            messages=[b.text or "" for b in self.content if b.type == "text"],
            usage=TokenUsage(input_tokens=self.usage.input_tokens, output_tokens=self.usage.output_tokens),
        )


def parse(raw_body: str) -> tuple[ChatResponse, Optional[str]]:
    """Deserialize a response body; returns the normalized response and its id."""
    parsed = AnthropicResponse.model_validate_json(raw_body)
    return parsed.to_chat_response(), parsed.id


__all__ = ["build_payload", "build_headers", "parse", "AnthropicResponse"]
