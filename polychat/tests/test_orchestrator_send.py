"""ChatOrchestrator.send: network path, retry budget, test doubles."""

from __future__ import annotations

import asyncio
import io
import json

import httpx
import pytest

from polychat.base.errors import (
    ContractViolation,
    CredentialNotFoundError,
    ErrorCode,
    ImagesNotSupportedError,
    MalformedResponseError,
    RetryExhaustedError,
    TransportError,
)
from polychat.base.models import ChatRequest, ContentPart, Message, Model
from polychat.base.timeouts import TimeoutOption
from polychat.service.orchestrator import ChatOrchestrator, send

from polychat.tests.utils import openai_body, request_json

PROMPT = [Message.system("sys"), Message.user("hello")]


@pytest.mark.asyncio
async def test_successful_openai_call(make_model, orchestrator_for):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=openai_body("hi there", prompt_tokens=11, completion_tokens=3))

    model = make_model("openai")
    response = await orchestrator_for(handler).send(ChatRequest.create(PROMPT, model, temperature=0.1))

    assert response.get_message() == "hi there"  # nosec B101
    assert response.usage.input_tokens == 11  # nosec B101
    assert response.meta.attempts == 1  # nosec B101
    assert response.meta.http_status == 200  # nosec B101
    assert response.meta.response_id == "chatcmpl-1"  # nosec B101
    sent = seen[0]
    assert str(sent.url) == "https://llm.test/v1/chat/completions"  # nosec B101
    assert sent.headers["Authorization"] == "Bearer sk-test"  # nosec B101
    body = request_json(sent)
    assert body["temperature"] == 0.1  # nosec B101
    assert "max_tokens" not in body  # nosec B101


@pytest.mark.asyncio
async def test_request_api_key_overrides_model_credential(make_model, orchestrator_for):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.headers["x-api-key"])
        body = {"content": [{"type": "text", "text": "ok"}], "usage": {"input_tokens": 1, "output_tokens": 1}}
        return httpx.Response(200, json=body)

    model = make_model("anthropic")
    orch = orchestrator_for(handler, keys={})
    response = await orch.send(ChatRequest.create(PROMPT, model, api_key="sk-override"))
    assert response.messages == ["ok"]  # nosec B101
    assert seen == ["sk-override"]  # nosec B101


@pytest.mark.asyncio
async def test_permanent_failure_attempts_max_retry_plus_one(make_model, orchestrator_for, sleeps):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(503, text="overloaded")

    request = ChatRequest.create(PROMPT, make_model(), max_retry=2, sleep_between_retries=1.5)
    with pytest.raises(RetryExhaustedError) as ei:
        await orchestrator_for(handler).send(request)

    assert len(calls) == 3  # nosec B101
    assert sleeps.calls == [1.5, 1.5]  # nosec B101
    assert ei.value.attempts == 3  # nosec B101
    assert ei.value.status == 503  # nosec B101
    assert ei.value.detail == "overloaded"  # nosec B101
    assert isinstance(ei.value.last_error, TransportError)  # nosec B101
    assert ei.value.last_error.code is ErrorCode.UNAVAILABLE  # nosec B101


@pytest.mark.asyncio
async def test_recovers_after_transient_failures(make_model, orchestrator_for, sleeps):
    statuses = iter([500, 429])

    def handler(request: httpx.Request) -> httpx.Response:
        status = next(statuses, 200)
        if status != 200:
            return httpx.Response(status, text="nope")
        return httpx.Response(200, json=openai_body("finally"))

    request = ChatRequest.create(PROMPT, make_model(), max_retry=5, sleep_between_retries=0.25)
    response = await orchestrator_for(handler).send(request)
    assert response.get_message() == "finally"  # nosec B101
    assert response.meta.attempts == 3  # nosec B101
    assert sleeps.calls == [0.25, 0.25]  # nosec B101


@pytest.mark.asyncio
async def test_malformed_body_shares_the_retry_budget(make_model, orchestrator_for, sleeps):
    bodies = iter(["<html>bad gateway</html>", json.dumps({"unexpected": True})])
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        return httpx.Response(200, text=next(bodies, "{}"))

    request = ChatRequest.create(PROMPT, make_model(), max_retry=1, sleep_between_retries=0.0)
    with pytest.raises(RetryExhaustedError) as ei:
        await orchestrator_for(handler).send(request)
    assert len(calls) == 2  # nosec B101 - not 2 x 2
    assert len(sleeps.calls) == 1  # nosec B101
    assert isinstance(ei.value.last_error, MalformedResponseError)  # nosec B101
    assert ei.value.last_error.model == "openai-test"  # nosec B101


@pytest.mark.asyncio
async def test_connection_errors_are_retried(make_model, orchestrator_for, sleeps):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    request = ChatRequest.create(PROMPT, make_model(), max_retry=1, sleep_between_retries=0.0)
    with pytest.raises(RetryExhaustedError) as ei:
        await orchestrator_for(handler).send(request)
    assert ei.value.status is None  # nosec B101
    assert ei.value.last_error.code is ErrorCode.UNAVAILABLE  # nosec B101
    assert "connection refused" in ei.value.detail  # nosec B101


@pytest.mark.asyncio
async def test_per_attempt_timeout(make_model, sleeps):
    class SlowTransport(httpx.AsyncBaseTransport):
        async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(5)
            return httpx.Response(200, json=openai_body("late"))

    orch = ChatOrchestrator(transport=SlowTransport(), sleep=sleeps, key_lookup=lambda _name: "k")
    request = ChatRequest.create(PROMPT, make_model(), timeout=TimeoutOption.millis_of(20))
    with pytest.raises(RetryExhaustedError) as ei:
        await orch.send(request)
    assert ei.value.last_error.code is ErrorCode.TIMEOUT  # nosec B101


@pytest.mark.asyncio
async def test_missing_credential_fails_before_any_attempt(make_model, orchestrator_for):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json=openai_body("x"))

    with pytest.raises(CredentialNotFoundError) as ei:
        await orchestrator_for(handler, keys={}).send(ChatRequest.create(PROMPT, make_model(), max_retry=3))
    assert ei.value.env_var == "TEST_API_KEY"  # nosec B101
    assert calls == []  # nosec B101


@pytest.mark.asyncio
async def test_dummy_model_needs_no_network():
    response = await send(ChatRequest.create(PROMPT, Model.dummy()))
    assert response.messages == ["dummy"]  # nosec B101
    assert response.usage.cost(Model.dummy()) == 0  # nosec B101
    assert response.meta.provider_name == "test"  # nosec B101


@pytest.mark.asyncio
async def test_stdin_model_echoes_and_reads_reply():
    out = io.StringIO()
    orch = ChatOrchestrator(stdin=io.StringIO("typed answer"), stdout=out)
    response = await orch.send(ChatRequest.create(PROMPT, Model.stdin()))
    assert response.messages == ["typed answer"]  # nosec B101
    assert out.getvalue() == "<|System|>\n\nsys\n\n<|User|>\n\nhello\n\n<|Assistant|>\n\n>>> "  # nosec B101


@pytest.mark.asyncio
async def test_network_path_refuses_test_models():
    orch = ChatOrchestrator()
    with pytest.raises(ContractViolation):
        await orch._send_network(ChatRequest.create(PROMPT, Model.dummy()), None)


IMAGE_PROMPT = [Message(role="user", content=[ContentPart.of_text("what is this?"), ContentPart.of_image("image/png", "AA==")])]


@pytest.mark.asyncio
async def test_image_parts_refused_for_text_only_model(make_model, orchestrator_for, sleeps):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=openai_body("never"))

    model = make_model("openai", can_read_images=False)
    request = ChatRequest.create(IMAGE_PROMPT, model, max_retry=3)
    with pytest.raises(ImagesNotSupportedError) as exc:
        await orchestrator_for(handler).send(request)

    assert exc.value.code is ErrorCode.VALIDATION  # nosec B101
    assert exc.value.model == "openai-test"  # nosec B101
    assert exc.value.retryable is False  # nosec B101
    assert seen == []  # nosec B101 - nothing reached the wire
    assert sleeps.calls == []  # nosec B101


@pytest.mark.asyncio
async def test_image_parts_sent_to_vision_model(make_model, orchestrator_for):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request_json(request))
        return httpx.Response(200, json=openai_body("a pixel"))

    model = make_model("openai", can_read_images=True)
    response = await orchestrator_for(handler).send(ChatRequest.create(IMAGE_PROMPT, model))

    assert response.get_message() == "a pixel"  # nosec B101
    parts = seen[0]["messages"][0]["content"]
    assert [p["type"] for p in parts] == ["text", "image_url"]  # nosec B101
