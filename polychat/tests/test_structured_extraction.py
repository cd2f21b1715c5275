from __future__ import annotations

from typing import Dict

import pytest
from pydantic import BaseModel

from polychat.base.structured import StructuredOutputError, extract_json, schema_adapter, validate_reply


class Point(BaseModel):
    x: int
    y: int


@pytest.mark.parametrize(
    "text,expected",
    [
        ('{"a": 1}', {"a": 1}),
        ("  [1, 2]\n", [1, 2]),
        ('Here it is:\n```json\n{"a": 2}\n```\nThanks', {"a": 2}),
        ('```\n{"a": 3}\n```', {"a": 3}),
        ('The answer is {"a": 4} as requested.', {"a": 4}),
        ("42", 42),
    ],
)
def test_extract_json_variants(text, expected):
    assert extract_json(text) == expected  # nosec B101


def test_extract_json_without_value():
    with pytest.raises(StructuredOutputError):
        extract_json("nothing to see {here")


def test_validate_reply_reports_location():
    with pytest.raises(StructuredOutputError) as ei:
        validate_reply('{"x": 1, "y": "nope"}', schema_adapter(Point))
    assert ei.value.detail.startswith("y:")  # nosec B101


def test_schema_adapter_precedence():
    assert schema_adapter(None, None) is None  # nosec B101
    assert validate_reply('{"k": 1}', schema_adapter(None, {"seed": 0})) == {"k": 1}  # nosec B101
    assert validate_reply('{"x": 1, "y": 2}', schema_adapter(Point, {})) == Point(x=1, y=2)  # nosec B101
    assert validate_reply('{"k": 5}', schema_adapter(Dict[str, int])) == {"k": 5}  # nosec B101
