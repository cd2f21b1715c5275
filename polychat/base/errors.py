"""Unified error taxonomy public surface.

This module re-exports the one-class-per-concern implementations under
``polychat.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import (
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
from .errors_parts.classification import classify_exception, classify_status

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
