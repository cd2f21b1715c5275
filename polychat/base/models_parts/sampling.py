"""
Sampling parameters shared by every provider wire format.

Each field is optional; an unset field is omitted from the outgoing payload
entirely (several providers reject unknown or null fields).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class SamplingParams:
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    frequency_penalty: Optional[float] = None

    def present(self, *names: str) -> Dict[str, Any]:
        """Return ``{name: value}`` for the requested fields that are set."""
        return {n: getattr(self, n) for n in names if getattr(self, n) is not None}


__all__ = ["SamplingParams"]
