"""Best-effort side-channel records written after a successful exchange.

Three optional append-only outputs, each configured by a path on the
request:

* **prompt dump** (``dump_pdl_at``): the conversation followed by the reply,
  rendered as ``<|role|>`` blocks.
* **JSON exchange dump** (``dump_json_at``): one JSON line
  ``{"request": <body>, "response": <body>}`` per network exchange.
* **usage ledger** (``record_api_usage_at``): one JSON line per call with a
  UTC timestamp, the model name, token counts and the cost in units of 1e-9
  dollars.

Each record is rendered fully in memory and then written with a single
append-mode ``write`` (no ``await`` in between), so an abandoned task never
leaves a partial record. Concurrent writers targeting the same path are not
serialized. A failed write is logged at WARNING and never affects the call
result.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

from ..base.logging import get_logger, log_event
from ..base.models_parts.chat_response import TokenUsage
from ..base.models_parts.message import Message
from ..base.models_parts.model import Model

_logger = get_logger("polychat.side_channels")


def render_prompt(messages: Sequence[Message], reply: Optional[str] = None) -> str:
    """Render ``messages`` (and the reply as an assistant turn) as ``<|role|>`` blocks."""
    turns = list(messages)
    if reply is not None:
        turns.append(Message.assistant(reply))
    return "".join(f"<|{m.role}|>\n\n{m.text_or_joined()}\n\n" for m in turns)


def render_exchange(request_body: Any, response_body: str) -> str:
    """Render one JSON exchange line; a non-JSON response is kept as a string."""
    try:
        response: Any = json.loads(response_body)
    except json.JSONDecodeError:
        response = response_body
    return json.dumps({"request": request_body, "response": response}, ensure_ascii=False) + "\n"


def render_usage(model: Model, usage: TokenUsage, now: Optional[datetime] = None) -> str:
    """Render one usage-ledger line."""
    ts = (now or datetime.now(timezone.utc)).isoformat()
    record = {
        "ts": ts,
        "model": model.name,
        "input_tokens": usage.input_tokens,
        "output_tokens": usage.output_tokens,
        "cost": usage.cost(model),
    }
    return json.dumps(record) + "\n"


def _append_best_effort(kind: str, path: Optional[str], render: Callable[[], str]) -> bool:
    if not path:
        return False
    try:
        text = render()
        with Path(path).open("a", encoding="utf-8") as fh:
            fh.write(text)
        return True
    except (OSError, TypeError, ValueError) as exc:
        log_event(
            _logger,
            "side_channel.write_failed",
            level=logging.WARNING,
            kind=kind,
            path=str(path),
            error=f"{type(exc).__name__}: {exc}",
        )
        return False


def append_prompt_dump(path: Optional[str], messages: Sequence[Message], reply: str) -> bool:
    """Append the rendered conversation and reply; returns True on success."""
    return _append_best_effort("prompt", path, lambda: render_prompt(messages, reply))


def append_json_exchange(path: Optional[str], request_body: Any, response_body: str) -> bool:
    """Append one raw request/response pair; returns True on success."""
    return _append_best_effort("json", path, lambda: render_exchange(request_body, response_body))


def append_usage_record(
    path: Optional[str], model: Model, usage: TokenUsage, now: Optional[datetime] = None
) -> bool:
    """Append one usage/cost ledger record; returns True on success."""
    return _append_best_effort("usage", path, lambda: render_usage(model, usage, now))


__all__ = [
    "render_prompt",
    "render_exchange",
    "render_usage",
    "append_prompt_dump",
    "append_json_exchange",
    "append_usage_record",
]
