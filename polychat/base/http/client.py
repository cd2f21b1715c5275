"""Async HTTP client factory.

Purpose:
    Build ``httpx.AsyncClient`` instances with the package's shared pool
    limits. A client is bound to the event loop it is first used on, so the
    orchestrator either reuses a caller-supplied client or opens one per
    logical call and closes it when the call finishes.

External dependencies:
    - ``httpx`` for the underlying asynchronous HTTP client.

Timeout strategy:
    - The httpx-level timeout is disabled. Per-attempt deadlines are enforced
      by the orchestrator with ``asyncio.wait_for`` so a single deadline
      covers connect, write and read together and ``None`` means unbounded.
"""

from __future__ import annotations

from typing import Optional

import httpx

from ..constants import HTTP_MAX_CONNECTIONS, HTTP_MAX_KEEPALIVE


def create_async_client(transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    """Return a new ``httpx.AsyncClient``.

    Parameters:
        transport: Optional transport override (``httpx.MockTransport`` in
            tests).
    """
    limits = httpx.Limits(max_connections=HTTP_MAX_CONNECTIONS, max_keepalive_connections=HTTP_MAX_KEEPALIVE)
    return httpx.AsyncClient(timeout=httpx.Timeout(None), limits=limits, transport=transport)


__all__ = ["create_async_client"]
