"""polychat.config.env
====================

Environment access for model credentials and package settings.

Purpose
-------
- Isolate the hidden global-state read of ``os.environ`` behind a
  :class:`KeyLookup` callable so tests can supply fixed credentials without
  mutating the real process environment.
- Name the few environment variables the package itself consults.

Failure Modes
-------------
- Lookups never raise; they return ``None`` when a variable is unset. Whether
  a missing variable is an error is decided by the caller (see
  :func:`polychat.config.resolve_api_key`).
"""

from __future__ import annotations

import os
from typing import Callable, Mapping, Optional

# Path of a YAML/JSON model catalog consulted by ``load_models``.
MODELS_FILE_ENV = "POLYCHAT_MODELS_FILE"

KeyLookup = Callable[[str], Optional[str]]


def env_lookup(name: str) -> Optional[str]:
    """Default :data:`KeyLookup`: read ``name`` from the process environment."""
    return os.environ.get(name)


def static_lookup(values: Mapping[str, str]) -> KeyLookup:
    """Return a :data:`KeyLookup` backed by a fixed mapping (for tests/embedding)."""
    frozen = dict(values)

    def _lookup(name: str) -> Optional[str]:
        return frozen.get(name)

    return _lookup


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder value.

    Heuristics: contains 'placeholder', 'changeme', or 'example'. The check is
    case-insensitive and resilient to surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or "example" in v


__all__ = [
    "MODELS_FILE_ENV",
    "KeyLookup",
    "env_lookup",
    "static_lookup",
    "is_placeholder",
]
