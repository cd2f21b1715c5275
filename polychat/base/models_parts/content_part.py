"""
Content part model for multi-part chat messages.

A message may carry plain text or a list of parts. Text parts hold ``text``;
image parts hold a ``media_type`` (e.g. ``image/png``) and base64 ``data``.
Provider wire modules translate parts into each vendor's block shape.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Literal, Optional

ContentPartType = Literal["text", "image"]


@dataclass(frozen=True)
class ContentPart:
    """A single piece of message content.

    Attributes:
        type: ``"text"`` or ``"image"``.
        text: Text content for text parts.
        media_type: MIME type for image parts.
        data: Base64-encoded payload for image parts.
    """

    type: ContentPartType
    text: Optional[str] = None
    media_type: Optional[str] = None
    data: Optional[str] = None

    @classmethod
    def of_text(cls, text: str) -> "ContentPart":
        return cls(type="text", text=text)

    @classmethod
    def of_image(cls, media_type: str, data: str) -> "ContentPart":
        return cls(type="image", media_type=media_type, data=data)

    def data_url(self) -> str:
        """Return the image as a ``data:`` URL (OpenAI/Cohere image shape)."""
        return f"data:{self.media_type};base64,{self.data}"

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


__all__ = ["ContentPart", "ContentPartType"]
