"""polychat package

Resilient, provider-agnostic client layer for chat-style LLM calls.

Purpose:
    Provide a minimal, stable API for external consumption (packaging is
    configured via the repository root ``pyproject.toml``). Callers resolve a
    :class:`Model` from the catalog, build a :class:`ChatRequest` and hand it
    to :func:`send` (free-form text) or :func:`send_and_validate`
    (schema-validated value).

Public API (re-exported):
    - Version: ``__version__``
    - Data model: :class:`Model`, :class:`RawModelConfig`,
      :class:`ChatRequest`, :class:`ChatResponse`, :class:`TokenUsage`,
      :class:`Message`, :class:`ContentPart`, :class:`TimeoutOption`
    - Provider dispatch: :func:`parse_provider`, :func:`parse_response`
    - Catalog: :func:`resolve`, :func:`get_model_by_name`,
      :func:`partial_match`, :func:`default_models`, :func:`load_models`
    - Credentials: :func:`resolve_api_key`
    - Execution: :class:`ChatOrchestrator`, :func:`send`,
      :func:`send_and_validate`
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode` and the
      specific error types
"""

from .base.errors import (
    AmbiguousModelError,
    ContractViolation,
    CredentialNotFoundError,
    ErrorCode,
    ImagesNotSupportedError,
    InvalidProviderError,
    MalformedResponseError,
    ProviderError,
    RetryExhaustedError,
    SchemaValidationExhaustedError,
    TransportError,
    UnknownModelError,
)
from .base.models import (
    ChatRequest,
    ChatResponse,
    ContentPart,
    Message,
    Model,
    RawModelConfig,
    TokenUsage,
)
from .base.provider_binding import (
    Anthropic,
    Cohere,
    OpenAiCompatible,
    ProviderBinding,
    Test,
    TestKind,
    parse_provider,
    parse_response,
)
from .base.timeouts import TimeoutOption
from .catalog import DEFAULT_MODELS, default_models, get_model_by_name, partial_match, resolve
from .config import resolve_api_key
from .service.model_catalog_loader import load_models
from .service.orchestrator import ChatOrchestrator, send, send_and_validate

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Data model
    "ChatRequest",
    "ChatResponse",
    "ContentPart",
    "Message",
    "Model",
    "RawModelConfig",
    "TokenUsage",
    "TimeoutOption",
    # Provider dispatch
    "ProviderBinding",
    "OpenAiCompatible",
    "Cohere",
    "Anthropic",
    "Test",
    "TestKind",
    "parse_provider",
    "parse_response",
    # Catalog
    "DEFAULT_MODELS",
    "default_models",
    "get_model_by_name",
    "partial_match",
    "resolve",
    "load_models",
    "resolve_api_key",
    # Execution
    "ChatOrchestrator",
    "send",
    "send_and_validate",
    # Exceptions
    "ProviderError",
    "ErrorCode",
    "InvalidProviderError",
    "CredentialNotFoundError",
    "ImagesNotSupportedError",
    "UnknownModelError",
    "AmbiguousModelError",
    "MalformedResponseError",
    "TransportError",
    "RetryExhaustedError",
    "SchemaValidationExhaustedError",
    "ContractViolation",
]
