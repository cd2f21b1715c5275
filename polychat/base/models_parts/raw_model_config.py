"""
Raw (human-edited) model configuration.

``RawModelConfig`` is the serializable form of a :class:`Model` as it appears
in catalog files: prices are decimal dollars per 1 million tokens, the
provider is a free-form string (``"openai"``, ``"Open AI"``, ``"anthropic"``,
``"cohere"``) with an optional endpoint override, and the timeout may be
omitted.

Conversion rules
----------------
- ``to_model`` scales prices by ``PRICE_SCALE`` and rounds half-up to an
  integer, so a catalog can be dumped and reloaded without float drift.
- ``from_model`` divides the integer prices back and always writes the
  binding's endpoint into ``api_url``.
"""
from __future__ import annotations

import math
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ...config.defaults import DEFAULT_API_TIMEOUT_SECONDS, PRICE_SCALE
from ..provider_binding import endpoint, parse_provider, provider_name
from .model import Model


def scale_price(dollars_per_1m: float) -> int:
    """Convert dollars per 1M tokens to integer dollars per 1B tokens."""
    return int(math.floor(dollars_per_1m * PRICE_SCALE + 0.5))


class RawModelConfig(BaseModel):
    """One catalog record as written in YAML/JSON."""

    model_config = ConfigDict(extra="forbid")

    name: str
    api_name: str
    can_read_images: bool = False
    api_provider: str
    api_url: Optional[str] = None
    input_price: float = Field(ge=0, description="dollars per 1M input tokens")
    output_price: float = Field(ge=0, description="dollars per 1M output tokens")
    api_timeout: Optional[int] = Field(default=None, ge=0, description="seconds")
    explanation: Optional[str] = None
    api_key: Optional[str] = None
    api_env_var: Optional[str] = None

    def to_model(self) -> Model:
        """Build the immutable :class:`Model`.

        Raises:
            InvalidProviderError: If ``api_provider`` is not recognized.
        """
        return Model(
            name=self.name,
            api_name=self.api_name,
            can_read_images=self.can_read_images,
            binding=parse_provider(self.api_provider, self.api_url),
            dollars_per_1b_input_tokens=scale_price(self.input_price),
            dollars_per_1b_output_tokens=scale_price(self.output_price),
            api_timeout=self.api_timeout if self.api_timeout is not None else DEFAULT_API_TIMEOUT_SECONDS,
            explanation=self.explanation,
            api_key=self.api_key,
            api_env_var=self.api_env_var,
        )

    @classmethod
    def from_model(cls, model: Model) -> "RawModelConfig":
        return cls(
            name=model.name,
            api_name=model.api_name,
            can_read_images=model.can_read_images,
            api_provider=provider_name(model.binding),
            api_url=endpoint(model.binding) or None,
            input_price=model.dollars_per_1b_input_tokens / PRICE_SCALE,
            output_price=model.dollars_per_1b_output_tokens / PRICE_SCALE,
            api_timeout=model.api_timeout,
            explanation=model.explanation,
            api_key=model.api_key,
            api_env_var=model.api_env_var,
        )


__all__ = ["RawModelConfig", "scale_price"]
