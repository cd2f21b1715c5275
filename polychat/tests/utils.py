"""Shared testing utilities for the polychat test suite.

Purpose:
    Avoid duplicating fake provider bodies and small helpers across test
    modules. Imported as ``polychat.tests.utils``.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

import httpx


class SleepRecorder:
    """Awaitable replacement for ``asyncio.sleep`` that records delays."""

    def __init__(self) -> None:
        self.calls: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.calls.append(delay)


def openai_body(*texts: str, prompt_tokens: int = 10, completion_tokens: int = 5) -> Dict[str, Any]:
    """Return an OpenAI chat-completions response body with one choice per text."""
    return {
        "id": "chatcmpl-1",
        "choices": [
            {"index": i, "message": {"role": "assistant", "content": t}, "finish_reason": "stop"}
            for i, t in enumerate(texts)
        ],
        "usage": {"prompt_tokens": prompt_tokens, "completion_tokens": completion_tokens},
    }


def request_json(request: httpx.Request) -> Dict[str, Any]:
    """Decode the JSON body of a captured request."""
    return json.loads(request.content.decode("utf-8"))
