"""
ChatRequest DTO: one logical call.

The request bundles the conversation, the resolved :class:`Model`, sampling
parameters (each optional and omitted from provider payloads when unset), an
optional credential override, the execution policy (retry count, sleep between
retries, per-attempt timeout), optional side-channel paths and an optional
output schema for structured mode.

``timeout`` is already resolved to seconds (``None`` = unbounded); use
:meth:`ChatRequest.create` to resolve a :class:`TimeoutOption` against the
model once, at construction time.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, List, Optional, Sequence

from ...config.defaults import (
    DEFAULT_MAX_RETRY,
    DEFAULT_SCHEMA_MAX_TRY,
    DEFAULT_SLEEP_BETWEEN_RETRIES_SECONDS,
)
from ..timeouts import TimeoutOption
from .message import Message
from .model import Model
from .sampling import SamplingParams


@dataclass
class ChatRequest:
    """Normalized chat request handed to the orchestrator.

    Attributes:
        messages: Ordered conversation so far.
        model: Target :class:`Model`.
        temperature, max_tokens, frequency_penalty: Optional sampling params.
        api_key: Credential override; wins over the model's own credential.
        max_retry: Extra attempts after the first failed one.
        sleep_between_retries: Seconds slept before each retry.
        timeout: Per-attempt deadline in seconds, ``None`` for no deadline.
        dump_pdl_at: Append the rendered prompt and reply here.
        dump_json_at: Append raw request/response JSON pairs here.
        record_api_usage_at: Append usage/cost ledger records here.
        schema: Output type for structured mode (anything pydantic's
            ``TypeAdapter`` accepts).
        schema_max_try: Bound on validate-and-reprompt cycles.
    """

    messages: List[Message]
    model: Model
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    frequency_penalty: Optional[float] = None
    api_key: Optional[str] = None
    max_retry: int = DEFAULT_MAX_RETRY
    sleep_between_retries: float = DEFAULT_SLEEP_BETWEEN_RETRIES_SECONDS
    timeout: Optional[float] = None
    dump_pdl_at: Optional[str] = None
    dump_json_at: Optional[str] = None
    record_api_usage_at: Optional[str] = None
    schema: Optional[Any] = None
    schema_max_try: int = DEFAULT_SCHEMA_MAX_TRY

    @classmethod
    def create(
        cls,
        messages: Sequence[Message],
        model: Model,
        *,
        timeout: Optional[TimeoutOption] = None,
        **kwargs: Any,
    ) -> "ChatRequest":
        """Build a request, resolving ``timeout`` against ``model``.

        ``timeout=None`` means the model default.
        """
        option = timeout or TimeoutOption()
        return cls(messages=list(messages), model=model, timeout=option.resolve(model), **kwargs)

    @property
    def sampling(self) -> SamplingParams:
        return SamplingParams(
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            frequency_penalty=self.frequency_penalty,
        )

    def with_messages(self, messages: Sequence[Message]) -> "ChatRequest":
        """Return a copy of this request carrying ``messages``."""
        return replace(self, messages=list(messages))


__all__ = ["ChatRequest"]
