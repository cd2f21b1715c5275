"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `polychat.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import (
    AmbiguousModelError,
    ContractViolation,
    CredentialNotFoundError,
    ImagesNotSupportedError,
    InvalidProviderError,
    MalformedResponseError,
    ProviderError,
    RetryExhaustedError,
    SchemaValidationExhaustedError,
    TransportError,
    UnknownModelError,
)
from .classification import classify_exception, classify_status

__all__ = [
    "ErrorCode",
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
    "classify_exception",
    "classify_status",
]
