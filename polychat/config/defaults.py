"""polychat.config.defaults
=========================

Central place for small, stable default values used across the package.
These defaults can be overridden per model (catalog file) or per request, but
provide sensible fallbacks for local development and tests.

This module intentionally imports nothing from the rest of the package to
prevent circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Provider endpoints ----
OPENAI_DEFAULT_URL = "https://api.openai.com/v1/chat/completions"
ANTHROPIC_URL = "https://api.anthropic.com/v1/messages"
COHERE_URL = "https://api.cohere.com/v2/chat"

# Anthropic requires an explicit API version header and a max_tokens value.
ANTHROPIC_API_VERSION = "2023-06-01"
ANTHROPIC_DEFAULT_MAX_TOKENS = 4096

# ---- Model catalog ----
# Seconds; used when a raw model config leaves api_timeout unset.
DEFAULT_API_TIMEOUT_SECONDS = 180
# Raw config prices are dollars per 1M tokens; models store dollars per 1B.
PRICE_SCALE = 1000

# ---- Request execution ----
DEFAULT_MAX_RETRY = 0
DEFAULT_SLEEP_BETWEEN_RETRIES_SECONDS = 5.0
DEFAULT_SCHEMA_MAX_TRY = 3

# ---- CLI ----
PROVIDER_CLI_DEFAULT_MODEL = "llama3.3-70b-groq"
PROVIDER_CLI_DEFAULT_SLEEP_MS = 5_000
PROVIDER_CLI_STDOUT = "STDOUT"

__all__ = [
    "OPENAI_DEFAULT_URL",
    "ANTHROPIC_URL",
    "COHERE_URL",
    "ANTHROPIC_API_VERSION",
    "ANTHROPIC_DEFAULT_MAX_TOKENS",
    "DEFAULT_API_TIMEOUT_SECONDS",
    "PRICE_SCALE",
    "DEFAULT_MAX_RETRY",
    "DEFAULT_SLEEP_BETWEEN_RETRIES_SECONDS",
    "DEFAULT_SCHEMA_MAX_TRY",
    "PROVIDER_CLI_DEFAULT_MODEL",
    "PROVIDER_CLI_DEFAULT_SLEEP_MS",
    "PROVIDER_CLI_STDOUT",
]
