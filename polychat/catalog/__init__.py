"""Model catalog: built-in defaults and name resolution."""

from .defaults import DEFAULT_MODELS, default_models
from .resolver import get_model_by_name, partial_match, resolve

__all__ = ["DEFAULT_MODELS", "default_models", "partial_match", "resolve", "get_model_by_name"]
