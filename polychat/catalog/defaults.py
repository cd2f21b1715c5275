"""Built-in model catalog.

Used when no catalog file is configured (see ``POLYCHAT_MODELS_FILE`` and
:func:`polychat.service.model_catalog_loader.load_models`). Prices are dollars
per 1M tokens, exactly as they would appear in a catalog file.
"""
from __future__ import annotations

from typing import List

from ..base.models_parts.model import Model
from ..base.models_parts.raw_model_config import RawModelConfig
from ..config.defaults import COHERE_URL, OPENAI_DEFAULT_URL

GROQ_URL = "https://api.groq.com/openai/v1/chat/completions"
OLLAMA_LOCAL_URL = "http://127.0.0.1:11434/v1/chat/completions"

DEFAULT_MODELS: List[RawModelConfig] = [
    RawModelConfig(
        name="llama3.3-70b-groq",
        api_name="llama-3.3-70b-versatile",
        can_read_images=False,
        api_provider="openai",
        api_url=GROQ_URL,
        input_price=0.59,
        output_price=0.79,
        api_env_var="GROQ_API_KEY",
    ),
    RawModelConfig(
        name="llama3.1-8b-groq",
        api_name="llama-3.1-8b-instant",
        can_read_images=False,
        api_provider="openai",
        api_url=GROQ_URL,
        input_price=0.05,
        output_price=0.08,
        api_env_var="GROQ_API_KEY",
    ),
    RawModelConfig(
        name="gpt-4o",
        api_name="gpt-4o",
        can_read_images=True,
        api_provider="openai",
        api_url=OPENAI_DEFAULT_URL,
        input_price=2.5,
        output_price=10.0,
        api_env_var="OPENAI_API_KEY",
    ),
    RawModelConfig(
        name="gpt-4o-mini",
        api_name="gpt-4o-mini",
        can_read_images=True,
        api_provider="openai",
        api_url=OPENAI_DEFAULT_URL,
        input_price=0.15,
        output_price=0.6,
        api_env_var="OPENAI_API_KEY",
    ),
    RawModelConfig(
        name="claude-3.5-sonnet",
        api_name="claude-3-5-sonnet-20240620",
        can_read_images=True,
        api_provider="anthropic",
        input_price=3.0,
        output_price=15.0,
        api_env_var="ANTHROPIC_API_KEY",
    ),
    RawModelConfig(
        name="command-r",
        api_name="command-r",
        can_read_images=True,
        api_provider="cohere",
        api_url=COHERE_URL,
        input_price=0.15,
        output_price=0.6,
        api_env_var="COHERE_API_KEY",
    ),
    RawModelConfig(
        name="command-r-plus",
        api_name="command-r-plus",
        can_read_images=True,
        api_provider="cohere",
        api_url=COHERE_URL,
        input_price=2.5,
        output_price=10.0,
        api_env_var="COHERE_API_KEY",
    ),
    RawModelConfig(
        name="phi-4-14b-ollama",
        api_name="phi4:14b",
        can_read_images=True,
        api_provider="openai",
        api_url=OLLAMA_LOCAL_URL,
        input_price=0.0,
        output_price=0.0,
    ),
]


def default_models() -> List[Model]:
    """Return the built-in catalog as resolved :class:`Model` values."""
    return [raw.to_model() for raw in DEFAULT_MODELS]


__all__ = ["DEFAULT_MODELS", "GROQ_URL", "OLLAMA_LOCAL_URL", "default_models"]
