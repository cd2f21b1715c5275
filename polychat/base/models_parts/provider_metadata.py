"""
Provider call metadata model.

Encapsulates diagnostic metadata for one logical call (HTTP status, response
identifier, latency, number of attempts). Attached to every normalized
response to support observability and audits.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


@dataclass
class ProviderMetadata:
    """Execution metadata for a provider call.

    Attributes:
        provider_name: Canonical provider key (e.g., ``"openai"``, ``"test"``).
        model_name: Logical model name used for the call.
        http_status: Final HTTP status code, when a network call happened.
        response_id: Provider-specific response identifier when available.
        latency_ms: Latency of the successful attempt, in milliseconds.
        attempts: Number of attempts the logical call needed.
        extra: Opaque, JSON-serializable map for provider-specific diagnostics.
    """

    provider_name: str
    model_name: str
    http_status: Optional[int] = None
    response_id: Optional[str] = None
    latency_ms: Optional[float] = None
    attempts: int = 1
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary of the metadata fields."""
        return asdict(self)


__all__ = ["ProviderMetadata"]
