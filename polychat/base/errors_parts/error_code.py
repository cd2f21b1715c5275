"""
Normalized error codes (taxonomy).

Defines the `ErrorCode` enumeration used across the provider bindings, the
catalog and the request orchestrator. Values are lowercase snake_case and are
considered a stable public contract for logging and usage analytics.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    # Catalog / configuration
    INVALID_PROVIDER = "invalid_provider"
    CREDENTIAL_NOT_FOUND = "credential_not_found"
    UNKNOWN_MODEL = "unknown_model"
    AMBIGUOUS_MODEL = "ambiguous_model"

    # Transport classification
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    TRANSIENT = "transient"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"

    # Response handling and budgets
    MALFORMED_RESPONSE = "malformed_response"
    RETRY_EXHAUSTED = "retry_exhausted"
    SCHEMA_EXHAUSTED = "schema_exhausted"


__all__ = ["ErrorCode"]
