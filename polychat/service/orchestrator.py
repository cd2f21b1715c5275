"""Request orchestrator: execution policy around one logical call.

Purpose
-------
Turn a :class:`ChatRequest` into a normalized :class:`ChatResponse` (``send``)
or into a schema-valid value (``send_and_validate``).

Flow of ``send``
----------------
1. ``Test`` bindings are answered by :mod:`polychat.mock` with no I/O.
2. Image parts sent to a model without ``can_read_images`` are refused with
   :class:`ImagesNotSupportedError` before anything else happens.
3. Otherwise the credential is resolved (request override, then the model's
   literal key, then its environment variable), the provider payload and
   headers are built once, and the POST is attempted under
   :func:`run_with_retry`:

   - each attempt is bounded by ``request.timeout`` via ``asyncio.wait_for``
     (``None`` = unbounded);
   - network errors, timeouts, non-2xx statuses and malformed bodies are all
     failed attempts drawing on the same ``max_retry`` budget;
   - ``max_retry = n`` allows ``n + 1`` attempts separated by ``n`` sleeps.

4. After success the side channels (prompt dump, JSON exchange dump, usage
   ledger) are appended best-effort.

Flow of ``send_and_validate``
-----------------------------
Up to ``schema_max_try`` cycles of ``send``. A transport failure consumes a
cycle. A reply that fails validation is appended to the conversation together
with a correction prompt before the next cycle. Exhaustion raises
:class:`SchemaValidationExhaustedError` if any cycle reached validation, and
re-raises the last transport error otherwise.

Concurrency
-----------
Attempts within a call are strictly sequential. Independent calls share no
mutable state apart from the caller-supplied client and side-channel paths.
"""

from __future__ import annotations

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional, TextIO, Tuple

import httpx

from ..base.constants import ERROR_BODY_PREVIEW_CHARS, SCHEMA_CORRECTION_PROMPT
from ..base.errors import (
    ContractViolation,
    ImagesNotSupportedError,
    MalformedResponseError,
    ProviderError,
    RetryExhaustedError,
    SchemaValidationExhaustedError,
    TransportError,
    classify_exception,
    classify_status,
)
from ..base.http.client import create_async_client
from ..base.log_support import LogContext
from ..base.logging import get_logger, log_event
from ..base.models_parts.chat_request import ChatRequest
from ..base.models_parts.chat_response import ChatResponse
from ..base.models_parts.message import Message
from ..base.models_parts.model import Model
from ..base.models_parts.provider_metadata import ProviderMetadata
from ..base.provider_binding import Test, build_http_request, parse_response
from ..base.resilience.retry import RetryConfig, Sleep, run_with_retry
from ..base.structured import StructuredOutputError, schema_adapter, validate_reply
from ..config import KeyLookup, resolve_api_key
from ..mock.client import TestModelClient
from . import side_channels

_logger = get_logger("polychat.orchestrator")


def _preview(text: str) -> str:
    if len(text) <= ERROR_BODY_PREVIEW_CHARS:
        return text
    return text[:ERROR_BODY_PREVIEW_CHARS] + "..."


class ChatOrchestrator:
    """Execute chat requests against providers.

    Parameters
    ----------
    client:
        Optional shared ``httpx.AsyncClient``. When omitted a client is opened
        per logical call and closed afterwards.
    transport:
        Optional httpx transport for the per-call client (tests pass
        ``httpx.MockTransport``). Ignored when ``client`` is given.
    sleep:
        Awaitable used between retries; defaults to ``asyncio.sleep``.
    key_lookup:
        Environment lookup for credentials; defaults to ``os.environ``.
    stdin, stdout:
        Streams for the ``stdin`` test double.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Sleep = asyncio.sleep,
        key_lookup: Optional[KeyLookup] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ) -> None:
        self._client = client
        self._transport = transport
        self._sleep = sleep
        self._key_lookup = key_lookup
        self._test_models = TestModelClient(stdin=stdin, stdout=stdout)

    # ------------------------------------------------------------------ send
    async def send(self, request: ChatRequest) -> ChatResponse:
        """Run one logical call and return the normalized response.

        Raises
        ------
        CredentialNotFoundError
            Before any attempt, if the model's credential variable is unset.
        RetryExhaustedError
            When every allowed attempt failed (transport, status or malformed
            body); ``status`` / ``detail`` describe the last failure.
        """
        model = request.model
        ctx = LogContext(provider=model.provider_name, model=model.name)
        log_event(
            _logger,
            "chat.start",
            ctx,
            messages=len(request.messages),
            max_retry=request.max_retry,
            timeout=request.timeout,
        )
        started = time.monotonic()
        if isinstance(model.binding, Test):
            response = self._test_models.complete(model.binding.kind, model.name, request.messages)
            raw_exchange = None
        else:
            response, raw_exchange = await self._send_network(request, ctx)

        self._write_side_channels(request, response, raw_exchange)
        meta = response.meta
        log_event(
            _logger,
            "chat.end",
            LogContext(provider=ctx.provider, model=ctx.model, response_id=meta.response_id if meta else None),
            attempts=meta.attempts if meta else 1,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
            cost=response.usage.cost(model),
            elapsed_ms=int((time.monotonic() - started) * 1000),
        )
        return response

    async def _send_network(
        self, request: ChatRequest, ctx: LogContext
    ) -> Tuple[ChatResponse, Tuple[Dict[str, Any], str]]:
        model = request.model
        # Test doubles must never reach the wire.
        if isinstance(model.binding, Test):
            raise ContractViolation(f"test model {model.name!r} routed to the network path")
        if not model.can_read_images and any(m.has_images() for m in request.messages):
            raise ImagesNotSupportedError(model.name, provider=model.provider_name)

        api_key = request.api_key if request.api_key is not None else resolve_api_key(model, self._key_lookup)
        url, headers, body = build_http_request(
            model.binding, model.api_name, request.messages, request.sampling, api_key
        )

        def _on_attempt(*, attempt: int, max_attempts: int, delay: Optional[float], error: Optional[ProviderError]) -> None:
            if error is None:
                return
            log_event(
                _logger,
                "chat.attempt.failed",
                ctx,
                level=logging.WARNING,
                attempt=attempt,
                max_attempts=max_attempts,
                code=error.code.value,
                status=getattr(error, "status", None),
                error=error.message,
            )
            if delay is not None:
                log_event(_logger, "chat.retry.sleep", ctx, attempt=attempt, delay_s=delay)

        config = RetryConfig(
            max_retry=request.max_retry,
            sleep_seconds=request.sleep_between_retries,
            attempt_logger=_on_attempt,
        )
        async with self._client_scope() as client:

            async def _attempt(n: int) -> Tuple[ChatResponse, str]:
                return await self._attempt(client, model, url, headers, body, request.timeout, n)

            response, raw_body = await run_with_retry(_attempt, config, sleep=self._sleep)
        return response, (body, raw_body)

    async def _attempt(
        self,
        client: httpx.AsyncClient,
        model: Model,
        url: str,
        headers: Dict[str, str],
        body: Dict[str, Any],
        timeout: Optional[float],
        attempt: int,
    ) -> Tuple[ChatResponse, str]:
        provider = model.provider_name
        started = time.monotonic()
        try:
            http_resp = await asyncio.wait_for(client.post(url, headers=headers, json=body), timeout)
        except asyncio.TimeoutError as exc:
            raise TransportError(
                classify_exception(exc),
                f"no response within {timeout}s",
                provider=provider,
                model=model.name,
                raw=exc,
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(
                classify_exception(exc),
                str(exc) or type(exc).__name__,
                provider=provider,
                model=model.name,
                raw=exc,
            ) from exc

        raw_body = http_resp.text
        if not http_resp.is_success:
            raise TransportError(
                classify_status(http_resp.status_code),
                _preview(raw_body),
                status=http_resp.status_code,
                provider=provider,
                model=model.name,
            )
        try:
            parsed, response_id = parse_response(model.binding, raw_body)
        except MalformedResponseError as exc:
            exc.model = model.name
            raise
        parsed.meta = ProviderMetadata(
            provider_name=provider,
            model_name=model.name,
            http_status=http_resp.status_code,
            response_id=response_id,
            latency_ms=(time.monotonic() - started) * 1000,
            attempts=attempt,
        )
        return parsed, raw_body

    @asynccontextmanager
    async def _client_scope(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with create_async_client(self._transport) as client:
            yield client

    @staticmethod
    def _write_side_channels(
        request: ChatRequest,
        response: ChatResponse,
        raw_exchange: Optional[Tuple[Dict[str, Any], str]],
    ) -> None:
        reply = response.messages[0] if response.messages else ""
        side_channels.append_prompt_dump(request.dump_pdl_at, request.messages, reply)
        if raw_exchange is not None:
            side_channels.append_json_exchange(request.dump_json_at, *raw_exchange)
        side_channels.append_usage_record(request.record_api_usage_at, request.model, response.usage)

    # ------------------------------------------------------- send_and_validate
    async def send_and_validate(self, request: ChatRequest, sentinel: Optional[Any] = None) -> Any:
        """Run up to ``request.schema_max_try`` send-and-validate cycles.

        ``request.schema`` is the output type; when it is ``None`` the type of
        ``sentinel`` is used instead, and with neither any JSON value passes.

        Raises
        ------
        SchemaValidationExhaustedError
            When the budget ran out and at least one cycle failed validation.
        RetryExhaustedError, TransportError, MalformedResponseError
            When every cycle failed in transport (the last error is re-raised).
        """
        model = request.model
        ctx = LogContext(provider=model.provider_name, model=model.name)
        adapter = schema_adapter(request.schema, sentinel)
        max_try = max(request.schema_max_try, 1)
        messages = list(request.messages)
        last_detail: Optional[str] = None
        last_transport: Optional[ProviderError] = None

        for cycle in range(1, max_try + 1):
            try:
                response = await self.send(request.with_messages(messages))
            except (RetryExhaustedError, TransportError, MalformedResponseError) as exc:
                last_transport = exc
                log_event(
                    _logger,
                    "schema.cycle.transport_failed",
                    ctx,
                    level=logging.WARNING,
                    cycle=cycle,
                    max_try=max_try,
                    error=exc.message,
                )
                continue

            reply = response.messages[0] if response.messages else ""
            try:
                return validate_reply(reply, adapter)
            except StructuredOutputError as exc:
                last_detail = exc.detail
                log_event(
                    _logger,
                    "schema.invalid",
                    ctx,
                    level=logging.WARNING,
                    cycle=cycle,
                    max_try=max_try,
                    error=exc.detail,
                )
                messages = messages + [
                    Message.assistant(reply),
                    Message.user(SCHEMA_CORRECTION_PROMPT.format(error=exc.detail)),
                ]

        if last_detail is not None:
            raise SchemaValidationExhaustedError(max_try, last_detail, model=model.name)
        if last_transport is None:  # pragma: no cover - loop always records an outcome
            raise RuntimeError("send_and_validate: no attempt outcome recorded")
        raise last_transport


async def send(request: ChatRequest, **kwargs: Any) -> ChatResponse:
    """Run ``request`` with a default :class:`ChatOrchestrator` (``kwargs`` go to its constructor)."""
    return await ChatOrchestrator(**kwargs).send(request)


async def send_and_validate(request: ChatRequest, sentinel: Optional[Any] = None, **kwargs: Any) -> Any:
    """Structured-mode counterpart of :func:`send`."""
    return await ChatOrchestrator(**kwargs).send_and_validate(request, sentinel)


__all__ = ["ChatOrchestrator", "send", "send_and_validate"]
