"""
Provider dispatch: the closed set of provider bindings a model can carry.

Purpose
-------
- Model the provider identity of a catalog entry as a tagged union:
  ``OpenAiCompatible(endpoint_url)``, ``Cohere()``, ``Anthropic()`` and
  ``Test(kind)``.
- Parse the human-edited provider string of a raw model config.
- Select the wire format (payload, headers, response schema) for a binding and
  normalize a raw response body into a :class:`ChatResponse`.

Design
------
- Dispatch is a single ``isinstance`` switch per operation; the provider set
  is fixed and small, so there is no registry or plugin lookup.
- ``Test`` bindings never reach the network. ``parse_response`` and
  ``build_http_request`` refuse them with :class:`ContractViolation`; the
  orchestrator routes them to :mod:`polychat.mock` instead.

Failure Modes
-------------
- Unknown provider string -> :class:`InvalidProviderError`.
- Body that is not JSON or does not match the provider schema ->
  :class:`MalformedResponseError` (retryable).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from ..anthropic import wire as anthropic_wire
from ..cohere import wire as cohere_wire
from ..config.defaults import ANTHROPIC_URL, COHERE_URL, OPENAI_DEFAULT_URL
from ..mock.client import TestKind
from ..openai import wire as openai_wire
from .errors import ContractViolation, InvalidProviderError, MalformedResponseError
from .models_parts.chat_response import ChatResponse
from .models_parts.message import Message
from .models_parts.sampling import SamplingParams


@dataclass(frozen=True)
class OpenAiCompatible:
    """OpenAI chat-completions protocol at ``endpoint_url``."""

    endpoint_url: str = OPENAI_DEFAULT_URL


@dataclass(frozen=True)
class Cohere:
    pass


@dataclass(frozen=True)
class Anthropic:
    pass


@dataclass(frozen=True)
class Test:
    """Network-free double; see :mod:`polychat.mock`."""

    __test__ = False

    kind: TestKind


ProviderBinding = Union[OpenAiCompatible, Cohere, Anthropic, Test]


def parse_provider(name: str, endpoint_override: Optional[str] = None) -> ProviderBinding:
    """Parse a provider string such as ``"Open AI"`` or ``"anthropic"``.

    The string is lower-cased and stripped of spaces and hyphens before
    matching. ``endpoint_override`` only applies to OpenAI-compatible
    providers; Cohere and Anthropic always use their canonical URL.

    Raises:
        InvalidProviderError: If the normalized string is not a known provider.
    """
    key = name.lower().replace(" ", "").replace("-", "")
    if key == "openai":
        return OpenAiCompatible(endpoint_override or OPENAI_DEFAULT_URL)
    if key == "cohere":
        return Cohere()
    if key == "anthropic":
        return Anthropic()
    raise InvalidProviderError(name)


def endpoint(binding: ProviderBinding) -> str:
    """Return the URL requests for ``binding`` are posted to ("" for test doubles)."""
    if isinstance(binding, OpenAiCompatible):
        return binding.endpoint_url
    if isinstance(binding, Cohere):
        return COHERE_URL
    if isinstance(binding, Anthropic):
        return ANTHROPIC_URL
    return ""


def provider_name(binding: ProviderBinding) -> str:
    """Return the display name used in config files and logs."""
    if isinstance(binding, OpenAiCompatible):
        return "openai"
    if isinstance(binding, Cohere):
        return "cohere"
    if isinstance(binding, Anthropic):
        return "anthropic"
    return "test"


def _wire(binding: ProviderBinding, operation: str) -> Any:
    if isinstance(binding, OpenAiCompatible):
        return openai_wire
    if isinstance(binding, Cohere):
        return cohere_wire
    if isinstance(binding, Anthropic):
        return anthropic_wire
    raise ContractViolation(f"{operation} called for a test binding ({binding.kind.value})")


def build_http_request(
    binding: ProviderBinding,
    api_name: str,
    messages: Sequence[Message],
    params: SamplingParams,
    api_key: str,
) -> Tuple[str, Dict[str, str], Dict[str, Any]]:
    """Return ``(url, headers, json_body)`` for one network attempt.

    Raises:
        ContractViolation: If ``binding`` is a ``Test`` binding.
    """
    wire = _wire(binding, "build_http_request")
    return endpoint(binding), wire.build_headers(api_key), wire.build_payload(api_name, messages, params)


def parse_response(binding: ProviderBinding, raw_body: str) -> Tuple[ChatResponse, Optional[str]]:
    """Deserialize ``raw_body`` per ``binding``'s wire format and normalize it.

    Returns the normalized response and the provider's response id (if any).

    Raises:
        ContractViolation: If ``binding`` is a ``Test`` binding.
        MalformedResponseError: If the body is not valid JSON or does not match
            the provider's response schema.
    """
    wire = _wire(binding, "parse_response")
    try:
        return wire.parse(raw_body)
    except ValidationError as exc:
        raise MalformedResponseError(
            f"{exc.error_count()} validation error(s): {exc.errors()[0]['msg']}",
            provider=provider_name(binding),
            raw=exc,
        ) from exc


__all__ = [
    "OpenAiCompatible",
    "Cohere",
    "Anthropic",
    "Test",
    "TestKind",
    "ProviderBinding",
    "parse_provider",
    "endpoint",
    "provider_name",
    "build_http_request",
    "parse_response",
]
