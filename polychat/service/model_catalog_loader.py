"""Model catalog loader: read and write catalog files of raw model configs.

A catalog file is YAML (or JSON, selected by a ``.json`` suffix) holding
either a top-level list of records or a mapping with a ``models`` list.

YAML Schema
-----------

.. code-block:: yaml

    models:
      - name: gpt-4o
        api_name: gpt-4o
        can_read_images: true
        api_provider: openai          # case/space/hyphen-insensitive
        api_url: https://api.openai.com/v1/chat/completions
        input_price: 2.5              # dollars per 1M input tokens
        output_price: 10.0            # dollars per 1M output tokens
        api_timeout: 180              # seconds, optional
        api_env_var: OPENAI_API_KEY

Every record is validated as a :class:`RawModelConfig`; unknown keys are
rejected so typos surface instead of silently falling back to defaults.

Catalog selection for :func:`load_models`
-----------------------------------------
1. An explicit ``path`` argument.
2. The file named by ``POLYCHAT_MODELS_FILE``.
3. The built-in :data:`polychat.catalog.DEFAULT_MODELS`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, List, Optional, Union

try:  # Import-time guard; keeps dependency explicit and localized.
    import yaml
except Exception as exc:  # pragma: no cover - import-time guard
    raise RuntimeError(
        "PyYAML is required to use the polychat model catalog loader. "
        "Install the 'pyyaml' package."
    ) from exc

from pydantic import ValidationError

from ..base.logging import get_logger, log_event
from ..base.models_parts.model import Model
from ..base.models_parts.raw_model_config import RawModelConfig
from ..catalog.defaults import DEFAULT_MODELS
from ..config.env import MODELS_FILE_ENV, KeyLookup, env_lookup

PathLike = Union[str, Path]

_logger = get_logger("polychat.catalog")


def _is_json(path: Path) -> bool:
    return path.suffix.lower() == ".json"


def _load_document(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if _is_json(path):
        return json.loads(text)
    return yaml.safe_load(text)


def _records(doc: Any, path: Path) -> List[Any]:
    if doc is None:
        return []
    if isinstance(doc, dict):
        doc = doc.get("models") or []
    if not isinstance(doc, list):
        raise ValueError(
            f"Catalog file {path} must define a list of models; got {type(doc).__name__} instead."
        )
    return doc


def load_raw_models(path: PathLike) -> List[RawModelConfig]:
    """Parse a catalog file into raw configs.

    Raises
    ------
    ValueError
        If the document is mis-shaped or a record fails validation; the
        message names the file and the record index.
    OSError
        If the file cannot be read.
    """
    p = Path(path)
    out: List[RawModelConfig] = []
    for idx, item in enumerate(_records(_load_document(p), p)):
        try:
            out.append(RawModelConfig.model_validate(item))
        except ValidationError as exc:
            raise ValueError(f"Catalog file {p}, model #{idx}: {exc}") from exc
    return out


def dump_raw_models(models: Iterable[RawModelConfig], path: PathLike) -> None:
    """Write ``models`` as a catalog file (YAML, or JSON for a ``.json`` path)."""
    p = Path(path)
    records = [m.model_dump(exclude_none=True) for m in models]
    if _is_json(p):
        p.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
    else:
        p.write_text(yaml.safe_dump({"models": records}, sort_keys=False), encoding="utf-8")


def load_models(path: Optional[PathLike] = None, lookup: Optional[KeyLookup] = None) -> List[Model]:
    """Return the active catalog as resolved models.

    Raises
    ------
    InvalidProviderError
        If a record names an unknown provider.
    """
    chosen = path or (lookup or env_lookup)(MODELS_FILE_ENV)
    if chosen:
        raws = load_raw_models(chosen)
        log_event(_logger, "catalog.loaded", path=str(chosen), models=len(raws))
    else:
        raws = list(DEFAULT_MODELS)
    return [raw.to_model() for raw in raws]


__all__ = [
    "load_raw_models",
    "dump_raw_models",
    "load_models",
]
