"""
Structured error exception types.

`ProviderError` wraps every recoverable failure with a normalized `ErrorCode`
for consistent handling, retry logic, and structured logging. The subclasses
below carry the extra context a caller needs to correct its input (attempted
name, candidate list, environment variable, last status) without inspecting
internals.

`ContractViolation` is deliberately *not* a `ProviderError`: it marks a
programming error and must never be handled as data.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a structured error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Provider key where the error originated (e.g., ``"openai"``).
        model: Optional model name associated with the failure.
        retryable: Hint for upstream retry logic (not authoritative).
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: Optional[str] = None
    model: Optional[str] = None
    retryable: bool = False
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider or '-'}:{self.model or '-'} {self.code.value}: {self.message}"


class InvalidProviderError(ProviderError):
    """Raised when a provider string does not name a known provider."""

    def __init__(self, provider_string: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_PROVIDER,
            message=f"invalid api provider: {provider_string!r}",
            provider=provider_string,
        )
        self.provider_string = provider_string


class CredentialNotFoundError(ProviderError):
    """Raised when the environment variable named by a model is unset."""

    def __init__(self, env_var: str, model: Optional[str] = None) -> None:
        super().__init__(
            code=ErrorCode.CREDENTIAL_NOT_FOUND,
            message=f"api key not found: environment variable {env_var!r} is not set",
            model=model,
        )
        self.env_var = env_var


class UnknownModelError(ProviderError):
    """Raised when a model query matches nothing usable in the catalog.

    ``candidates`` lists the partial matches (possibly empty) so the caller can
    disambiguate.
    """

    def __init__(
        self,
        name: str,
        candidates: Sequence[str] = (),
        code: ErrorCode = ErrorCode.UNKNOWN_MODEL,
    ) -> None:
        candidate_list: List[str] = list(candidates)
        if candidate_list:
            message = f"model name {name!r} is ambiguous; candidates: {', '.join(candidate_list)}"
        else:
            message = f"unknown model name {name!r}"
        super().__init__(code=code, message=message, model=name)
        self.name = name
        self.candidates = candidate_list


class AmbiguousModelError(UnknownModelError):
    """Raised when a model query partially matches more than one entry."""

    def __init__(self, name: str, candidates: Sequence[str]) -> None:
        super().__init__(name, candidates, code=ErrorCode.AMBIGUOUS_MODEL)


class ImagesNotSupportedError(ProviderError):
    """Raised before any attempt when image parts target a text-only model."""

    def __init__(self, model: str, provider: Optional[str] = None) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION,
            message=f"model {model!r} cannot read images; remove the image parts or pick a vision model",
            provider=provider,
            model=model,
        )


class MalformedResponseError(ProviderError):
    """Raised when a response body fails provider-specific deserialization."""

    def __init__(self, detail: str, provider: Optional[str] = None, raw: Optional[Exception] = None) -> None:
        super().__init__(
            code=ErrorCode.MALFORMED_RESPONSE,
            message=f"malformed response: {detail}",
            provider=provider,
            retryable=True,
            raw=raw,
        )
        self.detail = detail


class TransportError(ProviderError):
    """Raised for network failures and non-success HTTP status codes."""

    def __init__(
        self,
        code: ErrorCode,
        detail: str,
        *,
        status: Optional[int] = None,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        raw: Optional[Exception] = None,
    ) -> None:
        prefix = f"status {status}: " if status is not None else ""
        super().__init__(
            code=code,
            message=f"{prefix}{detail}",
            provider=provider,
            model=model,
            retryable=True,
            raw=raw,
        )
        self.status = status
        self.detail = detail


class RetryExhaustedError(ProviderError):
    """Raised after the last allowed attempt of a logical call failed.

    ``last_error`` is the final :class:`TransportError` or
    :class:`MalformedResponseError`; its status and detail are exposed here.
    """

    def __init__(self, attempts: int, last_error: ProviderError) -> None:
        super().__init__(
            code=ErrorCode.RETRY_EXHAUSTED,
            message=f"giving up after {attempts} attempt(s): {last_error.message}",
            provider=last_error.provider,
            model=last_error.model,
            raw=last_error,
        )
        self.attempts = attempts
        self.last_error = last_error

    @property
    def status(self) -> Optional[int]:
        return getattr(self.last_error, "status", None)

    @property
    def detail(self) -> str:
        return getattr(self.last_error, "detail", self.last_error.message)


class SchemaValidationExhaustedError(ProviderError):
    """Raised when every structured-output attempt failed schema validation."""

    def __init__(self, attempts: int, last_detail: str, model: Optional[str] = None) -> None:
        super().__init__(
            code=ErrorCode.SCHEMA_EXHAUSTED,
            message=f"no schema-valid response after {attempts} attempt(s): {last_detail}",
            model=model,
        )
        self.attempts = attempts
        self.last_detail = last_detail


class ContractViolation(AssertionError):
    """A programming-contract violation; aborts instead of surfacing as data."""


__all__ = [
    "ProviderError",
    "InvalidProviderError",
    "CredentialNotFoundError",
    "UnknownModelError",
    "AmbiguousModelError",
    "ImagesNotSupportedError",
    "MalformedResponseError",
    "TransportError",
    "RetryExhaustedError",
    "SchemaValidationExhaustedError",
    "ContractViolation",
]
