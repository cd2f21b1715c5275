"""Model name resolution.

Resolution order for a query string:

1. an entry whose ``name`` equals the query;
2. the single entry whose name contains the query as an ordered byte
   subsequence (``"sonnet"`` finds ``"claude-3.5-sonnet"``);
3. the reserved identities ``"dummy"`` and ``"stdin"``;
4. otherwise :class:`UnknownModelError` (or :class:`AmbiguousModelError` when
   several entries matched) carrying the partial-match candidates.

Ambiguity is always surfaced; resolution never picks between two candidates.
"""
from __future__ import annotations

from typing import List, Sequence

from ..base.errors import AmbiguousModelError, UnknownModelError
from ..base.logging import get_logger, log_event
from ..base.models_parts.model import Model
from ..mock.client import TestKind

_logger = get_logger("polychat.catalog")


def partial_match(haystack: str, needle: str) -> bool:
    """Return True if ``needle``'s bytes appear in ``haystack`` in order.

    Case-sensitive and not necessarily contiguous.
    """
    h = haystack.encode("utf-8")
    n = needle.encode("utf-8")
    cursor = 0
    for byte in h:
        if cursor == len(n):
            break
        if byte == n[cursor]:
            cursor += 1
    return cursor == len(n)


def resolve(catalog: Sequence[Model], query: str) -> Model:
    """Resolve ``query`` against ``catalog``.

    Raises:
        AmbiguousModelError: Several entries partially matched.
        UnknownModelError: Nothing matched and the query is not reserved.
    """
    candidates: List[Model] = []
    for model in catalog:
        if model.name == query:
            return model
        if partial_match(model.name, query):
            candidates.append(model)

    if len(candidates) == 1:
        log_event(_logger, "catalog.partial_match", query=query, model=candidates[0].name)
        return candidates[0]
    if query == TestKind.DUMMY.value:
        return Model.dummy()
    if query == TestKind.STDIN.value:
        return Model.stdin()

    names = [m.name for m in candidates]
    if len(names) > 1:
        raise AmbiguousModelError(query, names)
    raise UnknownModelError(query, names)


# Name used by the command-line front end and older call sites.
get_model_by_name = resolve

__all__ = ["partial_match", "resolve", "get_model_by_name"]
