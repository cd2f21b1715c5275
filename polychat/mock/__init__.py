"""Network-free test doubles (``dummy`` and ``stdin`` models)."""

from .client import DUMMY_REPLY, TestKind, TestModelClient, render_turns

__all__ = ["TestKind", "TestModelClient", "DUMMY_REPLY", "render_turns"]
