"""Base shared constants for the request pipeline.

Central location to avoid scattering magic strings and default numbers.

Security
--------
This module contains only generic sentinel strings and numeric defaults.
There are no credentials or tokens embedded.
"""
from __future__ import annotations

# Timeout option sentinels accepted by the CLI and ``TimeoutOption.parse``
TIMEOUT_MODEL_DEFAULT = "d"  # use the model's api_timeout
TIMEOUT_NONE = "n"  # no per-attempt deadline

# Structured output: user turn appended after a reply that failed validation
SCHEMA_CORRECTION_PROMPT = (
    "Your previous answer could not be accepted: {error}\n"
    "Reply again with only a JSON value that satisfies the requested schema."
)

# Maximum characters of a response body carried in error details/logs
ERROR_BODY_PREVIEW_CHARS = 512

# Shared HTTP connection pool limits (one logical call uses one connection at a time)
HTTP_MAX_CONNECTIONS = 20
HTTP_MAX_KEEPALIVE = 10

__all__ = [
    "TIMEOUT_MODEL_DEFAULT",
    "TIMEOUT_NONE",
    "SCHEMA_CORRECTION_PROMPT",
    "ERROR_BODY_PREVIEW_CHARS",
    "HTTP_MAX_CONNECTIONS",
    "HTTP_MAX_KEEPALIVE",
]
