"""Structured-output helpers: pull a JSON value out of a reply and validate it.

Models asked for JSON frequently wrap the value in a Markdown code fence or a
sentence of prose. :func:`extract_json` tries, in order:

1. the whole reply,
2. the first fenced block (```json ... ``` or bare ``` ... ```),
3. the first decodable value starting at a ``{`` or ``[``.

Validation is delegated to pydantic's ``TypeAdapter`` so any type it accepts
(a ``BaseModel`` subclass, ``dict[str, int]``, ``list[str]``, a dataclass,
...) can serve as the schema.
"""
from __future__ import annotations

import json
import re
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

_FENCE_RE = re.compile(r"```(?:json|JSON)?\s*\n?(.*?)```", re.DOTALL)
_DECODER = json.JSONDecoder()


class StructuredOutputError(ValueError):
    """A reply that could not be turned into a schema-valid value."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


def extract_json(text: str) -> Any:
    """Return the first JSON value found in ``text``.

    Raises:
        StructuredOutputError: If no JSON value can be decoded.
    """
    stripped = text.strip()
    try:
        return json.loads(stripped)
    except json.JSONDecodeError:
        pass
    for block in _FENCE_RE.findall(stripped):
        try:
            return json.loads(block.strip())
        except json.JSONDecodeError:
            continue
    for idx, ch in enumerate(stripped):
        if ch in "{[":
            try:
                value, _end = _DECODER.raw_decode(stripped, idx)
                return value
            except json.JSONDecodeError:
                continue
    raise StructuredOutputError("reply does not contain a JSON value")


def schema_adapter(schema: Optional[Any], sentinel: Optional[Any] = None) -> Optional[TypeAdapter]:
    """Build the validator for structured mode.

    ``schema`` wins; otherwise the sentinel's type anchors validation; with
    neither, ``None`` is returned and any JSON value is accepted.
    """
    if schema is not None:
        return TypeAdapter(schema)
    if sentinel is not None:
        return TypeAdapter(type(sentinel))
    return None


def validate_reply(text: str, adapter: Optional[TypeAdapter]) -> Any:
    """Extract the JSON value from ``text`` and validate it with ``adapter``.

    Raises:
        StructuredOutputError: With a short, model-readable description of the
            first problem found.
    """
    value = extract_json(text)
    if adapter is None:
        return value
    try:
        return adapter.validate_python(value)
    except ValidationError as exc:
        first = exc.errors()[0]
        loc = ".".join(str(p) for p in first.get("loc", ())) or "<root>"
        raise StructuredOutputError(f"{loc}: {first.get('msg', 'invalid value')}") from exc


__all__ = ["StructuredOutputError", "extract_json", "schema_adapter", "validate_reply"]
