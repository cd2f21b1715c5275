"""
Message DTO used across providers.

Defines the `Message` dataclass and the `Role` literal. Content may be either
plain text or a list of `ContentPart` objects. The message list handed to the
orchestrator is already fully resolved (templates rendered, images inlined).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Union

from .content_part import ContentPart

Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class Message:
    """A role-tagged chat message.

    Attributes:
        role: ``"system"``, ``"user"`` or ``"assistant"``.
        content: Either a plain string or a list of `ContentPart` items.
    """

    role: Role
    content: Union[str, List[ContentPart]]

    @classmethod
    def system(cls, text: str) -> "Message":
        return cls(role="system", content=text)

    @classmethod
    def user(cls, text: str) -> "Message":
        return cls(role="user", content=text)

    @classmethod
    def assistant(cls, text: str) -> "Message":
        return cls(role="assistant", content=text)

    def is_structured(self) -> bool:
        """Return True if the message content is a list of parts."""
        return isinstance(self.content, list)

    def parts(self) -> List[ContentPart]:
        """Return the content as a list of parts (wrapping plain text)."""
        if isinstance(self.content, str):
            return [ContentPart.of_text(self.content)]
        return list(self.content)

    def has_images(self) -> bool:
        return isinstance(self.content, list) and any(p.type == "image" for p in self.content)

    def text_or_joined(self) -> str:
        """Return a flattened string view of the content.

        Text parts are concatenated; image parts render as ``[image/png]``
        style tokens so dumps and logs stay readable.
        """
        if isinstance(self.content, str):
            return self.content
        out: List[str] = []
        for p in self.content:
            out.append((p.text or "") if p.type == "text" else f"[{p.media_type or p.type}]")
        return "".join(out)

    def to_dict(self) -> Dict[str, Any]:
        if isinstance(self.content, str):
            return {"role": self.role, "content": self.content}
        return {"role": self.role, "content": [p.to_dict() for p in self.content]}


def message_from_dict(raw: Dict[str, Any]) -> Message:
    """Build a `Message` from its ``to_dict`` shape (used by the CLI loader).

    Raises:
        ValueError: If the role is unknown or the content shape is invalid.
    """
    role = raw.get("role")
    if role not in ("system", "user", "assistant"):
        raise ValueError(f"invalid message role: {role!r}")
    content = raw.get("content", "")
    if isinstance(content, str):
        return Message(role=role, content=content)
    if not isinstance(content, list):
        raise ValueError("message content must be a string or a list of parts")
    parts: List[ContentPart] = []
    for item in content:
        if not isinstance(item, dict):
            raise ValueError("message parts must be mappings")
        if item.get("type") == "image":
            if not item.get("media_type") or not item.get("data"):
                raise ValueError("image parts need media_type and data")
            parts.append(ContentPart.of_image(item["media_type"], item["data"]))
        else:
            parts.append(ContentPart.of_text(str(item.get("text", ""))))
    return Message(role=role, content=parts)


__all__ = ["Message", "Role", "message_from_dict"]
