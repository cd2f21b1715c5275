"""Network-free test doubles bound to the ``Test`` provider binding.

Purpose
-------
Two reserved models never touch the network and need no credential:

* ``dummy`` always answers with the literal text ``"dummy"``.
* ``stdin`` echoes the conversation to standard output with role tags and
  blocks reading the whole reply from standard input. It is meant for
  manual/interactive testing only; the read intentionally blocks the event
  loop.

The orchestrator routes ``Test`` bindings here and never through
``parse_response``.
"""

from __future__ import annotations

import sys
from enum import Enum
from typing import Optional, Sequence, TextIO

from ..base.models_parts.chat_response import ChatResponse, TokenUsage
from ..base.models_parts.message import Message
from ..base.models_parts.provider_metadata import ProviderMetadata

DUMMY_REPLY = "dummy"


class TestKind(str, Enum):
    """Which network-free double a ``Test`` binding stands for."""

    __test__ = False

    DUMMY = "dummy"
    STDIN = "stdin"


def render_turns(messages: Sequence[Message]) -> str:
    """Render messages as ``<|Role|>`` blocks, the shape used by the stdin double."""
    return "".join(
        f"<|{m.role.capitalize()}|>\n\n{m.text_or_joined()}\n\n" for m in messages
    )


class TestModelClient:
    """Produce replies for ``Test`` bindings.

    Parameters
    ----------
    stdin, stdout:
        Streams used by the ``stdin`` double; default to the process streams
        at call time so tests can swap them.
    """

    __test__ = False

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
        self._stdin = stdin
        self._stdout = stdout

    def reply(self, kind: TestKind, messages: Sequence[Message]) -> str:
        if kind is TestKind.DUMMY:
            return DUMMY_REPLY
        out = self._stdout or sys.stdout
        out.write(render_turns(messages))
        out.write("<|Assistant|>\n\n>>> ")
        out.flush()
        return (self._stdin or sys.stdin).read()

    def complete(self, kind: TestKind, model_name: str, messages: Sequence[Message]) -> ChatResponse:
        """Return a single-choice, zero-usage normalized response."""
        return ChatResponse(
            messages=[self.reply(kind, messages)],
            usage=TokenUsage(),
            meta=ProviderMetadata(provider_name="test", model_name=model_name, extra={"test_kind": kind.value}),
        )


__all__ = ["TestKind", "TestModelClient", "DUMMY_REPLY", "render_turns"]
