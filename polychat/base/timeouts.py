"""Per-attempt timeout option.

The CLI (and any embedding caller) expresses the per-attempt deadline as a
string: ``"d"`` uses the model's built-in ``api_timeout``, ``"n"`` disables the
deadline, and anything else is a literal number of milliseconds.

:class:`TimeoutOption` is parsed once and resolved once, when the
:class:`~polychat.base.models_parts.chat_request.ChatRequest` is constructed;
the orchestrator only ever sees ``Optional[float]`` seconds.

Failure Modes
-------------
``ValueError`` from :meth:`TimeoutOption.parse` when the literal is not a
non-negative integer.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

from .constants import TIMEOUT_MODEL_DEFAULT, TIMEOUT_NONE

if TYPE_CHECKING:
    from .models_parts.model import Model


class TimeoutKind(str, Enum):
    MODEL_DEFAULT = "model_default"
    NONE = "none"
    MILLIS = "millis"


@dataclass(frozen=True)
class TimeoutOption:
    """Parsed timeout option.

    Attributes:
        kind: Which of the three forms was given.
        millis: Deadline in milliseconds when ``kind`` is ``MILLIS``.
    """

    kind: TimeoutKind = TimeoutKind.MODEL_DEFAULT
    millis: Optional[int] = None

    @classmethod
    def parse(cls, raw: str) -> "TimeoutOption":
        value = raw.strip()
        if value == TIMEOUT_MODEL_DEFAULT:
            return cls(TimeoutKind.MODEL_DEFAULT)
        if value == TIMEOUT_NONE:
            return cls(TimeoutKind.NONE)
        try:
            millis = int(value)
        except ValueError:
            raise ValueError(
                f"invalid timeout {raw!r}: expected '{TIMEOUT_MODEL_DEFAULT}', '{TIMEOUT_NONE}' or milliseconds"
            ) from None
        if millis < 0:
            raise ValueError(f"invalid timeout {raw!r}: must not be negative")
        return cls(TimeoutKind.MILLIS, millis)

    @classmethod
    def millis_of(cls, millis: int) -> "TimeoutOption":
        return cls(TimeoutKind.MILLIS, millis)

    def resolve(self, model: "Model") -> float | None:
        """Return the deadline in seconds for ``model`` (``None`` = unbounded)."""
        if self.kind is TimeoutKind.NONE:
            return None
        if self.kind is TimeoutKind.MILLIS:
            return (self.millis or 0) / 1000
        return float(model.api_timeout)


__all__ = ["TimeoutKind", "TimeoutOption"]
