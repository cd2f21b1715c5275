"""Configuration layer: defaults, environment access and credential resolution.

Credential precedence for a model (see :func:`resolve_api_key`):
    1. A literal ``api_key`` embedded in the model config.
    2. The environment variable named by ``api_env_var``; an unset variable
       is a :class:`~polychat.base.errors.CredentialNotFoundError`.
    3. Neither configured: the endpoint is assumed to need no key and the
       empty string is returned (local / self-hosted OpenAI-compatible
       servers).

Public API
----------
* resolve_api_key(model, lookup=None) -> str
* KeyLookup, env_lookup, static_lookup
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from ..base.errors import CredentialNotFoundError
from ..base.logging import get_logger, log_event
from .env import MODELS_FILE_ENV, KeyLookup, env_lookup, is_placeholder, static_lookup

if TYPE_CHECKING:
    from ..base.models_parts.model import Model

_logger = get_logger("polychat.config")


def resolve_api_key(model: "Model", lookup: Optional[KeyLookup] = None) -> str:
    """Return the credential to send for ``model``.

    Parameters
    ----------
    model:
        The resolved catalog model.
    lookup:
        Environment lookup capability; defaults to :func:`env_lookup`.

    Raises
    ------
    CredentialNotFoundError
        If ``model.api_env_var`` names a variable that is not set.
    """
    if model.api_key is not None:
        return model.api_key
    if model.api_env_var is not None:
        value = (lookup or env_lookup)(model.api_env_var)
        if value is None:
            raise CredentialNotFoundError(model.api_env_var, model=model.name)
        if is_placeholder(value):
            log_event(
                _logger,
                "config.placeholder_key",
                model=model.name,
                env_var=model.api_env_var,
            )
        return value
    return ""


__all__ = [
    "resolve_api_key",
    "KeyLookup",
    "env_lookup",
    "static_lookup",
    "MODELS_FILE_ENV",
]
