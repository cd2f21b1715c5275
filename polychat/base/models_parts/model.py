"""
Model value object.

A :class:`Model` is the resolved, immutable form of one catalog entry: the
logical name callers use, the provider-side identifier, the provider binding
and integer pricing in dollars per 1 billion tokens. It is built from a
:class:`~polychat.base.models_parts.raw_model_config.RawModelConfig` or from
one of the two reserved identities (:meth:`Model.dummy`, :meth:`Model.stdin`)
and is shared read-only between concurrent calls.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ...config.defaults import DEFAULT_API_TIMEOUT_SECONDS
from ...mock.client import TestKind
from ..provider_binding import ProviderBinding, Test
from ..provider_binding import endpoint as binding_endpoint
from ..provider_binding import provider_name as binding_provider_name


@dataclass(frozen=True)
class Model:
    """A resolved catalog model.

    Attributes:
        name: Logical, user-facing name; unique key for lookup.
        api_name: Identifier sent to the provider.
        can_read_images: Whether image content parts may be sent.
        binding: The provider binding (protocol + endpoint).
        dollars_per_1b_input_tokens: Input price, integer dollars per 1B tokens.
        dollars_per_1b_output_tokens: Output price, integer dollars per 1B tokens.
        api_timeout: Default per-attempt timeout in seconds.
        explanation: Optional human description.
        api_key: Literal credential; wins over ``api_env_var``.
        api_env_var: Environment variable read for the credential at call time.
    """

    name: str
    api_name: str
    can_read_images: bool
    binding: ProviderBinding
    dollars_per_1b_input_tokens: int
    dollars_per_1b_output_tokens: int
    api_timeout: int = DEFAULT_API_TIMEOUT_SECONDS
    explanation: Optional[str] = None
    api_key: Optional[str] = None
    api_env_var: Optional[str] = None

    @classmethod
    def dummy(cls) -> "Model":
        """Zero-cost model that always answers ``"dummy"`` without I/O."""
        return cls._test_model(TestKind.DUMMY)

    @classmethod
    def stdin(cls) -> "Model":
        """Model that prints the conversation and reads the reply from stdin."""
        return cls._test_model(TestKind.STDIN)

    @classmethod
    def _test_model(cls, kind: TestKind) -> "Model":
        return cls(
            name=kind.value,
            api_name="",
            can_read_images=False,
            binding=Test(kind),
            dollars_per_1b_input_tokens=0,
            dollars_per_1b_output_tokens=0,
            api_timeout=DEFAULT_API_TIMEOUT_SECONDS,
        )

    @property
    def endpoint(self) -> str:
        return binding_endpoint(self.binding)

    @property
    def provider_name(self) -> str:
        return binding_provider_name(self.binding)

    def is_test(self) -> bool:
        return isinstance(self.binding, Test)


__all__ = ["Model"]
