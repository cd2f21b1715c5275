"""
Normalized chat response DTOs.

Every provider's parsed response is lifted into :class:`ChatResponse`: an
ordered list of generated message choices plus :class:`TokenUsage`. The
provider-specific parsed objects are discarded right after normalization.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .provider_metadata import ProviderMetadata

if TYPE_CHECKING:
    from .model import Model


@dataclass(frozen=True)
class TokenUsage:
    """Input/output token counts reported by a provider."""

    input_tokens: int = 0
    output_tokens: int = 0

    def cost(self, model: "Model") -> int:
        """Return the call's cost in units of 1e-9 dollars.

        Integer arithmetic on the per-1B-token price fields:
        ``input_tokens * in_price + output_tokens * out_price``.
        """
        return (
            self.input_tokens * model.dollars_per_1b_input_tokens
            + self.output_tokens * model.dollars_per_1b_output_tokens
        )


@dataclass
class ChatResponse:
    """Provider-agnostic response of one logical call.

    Attributes:
        messages: Generated message choices, in provider order.
        usage: Token usage of the successful attempt.
        meta: Execution `ProviderMetadata`.
    """

    messages: List[str]
    usage: TokenUsage = field(default_factory=TokenUsage)
    meta: Optional[ProviderMetadata] = None

    def get_message(self, index: int = 0) -> str:
        """Return the choice at ``index``.

        Raises:
            IndexError: If the response has no choice at ``index``.
        """
        if index < 0 or index >= len(self.messages):
            raise IndexError(f"response has {len(self.messages)} choice(s); no index {index}")
        return self.messages[index]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "messages": list(self.messages),
            "usage": {"input_tokens": self.usage.input_tokens, "output_tokens": self.usage.output_tokens},
            "meta": self.meta.to_dict() if self.meta else None,
        }


__all__ = ["ChatResponse", "TokenUsage"]
