"""Provider dispatch: parsing provider strings and normalizing responses."""

from __future__ import annotations

import json

import pytest

from polychat.base.errors import ContractViolation, InvalidProviderError, MalformedResponseError
from polychat.base.provider_binding import (
    Anthropic,
    Cohere,
    OpenAiCompatible,
    Test,
    endpoint,
    parse_provider,
    parse_response,
    provider_name,
)
from polychat.config.defaults import ANTHROPIC_URL, COHERE_URL, OPENAI_DEFAULT_URL
from polychat.mock import TestKind


@pytest.mark.parametrize("name", ["openai", "Open AI", "OPEN-AI", " open - ai "])
def test_provider_strings_are_case_space_hyphen_insensitive(name):
    assert parse_provider(name) == OpenAiCompatible(OPENAI_DEFAULT_URL)  # nosec B101


def test_parse_provider_variants():
    assert parse_provider("Cohere") == Cohere()  # nosec B101
    assert parse_provider("anthropic", "http://ignored") == Anthropic()  # nosec B101
    assert parse_provider("openai", "http://x/v1") == OpenAiCompatible("http://x/v1")  # nosec B101


def test_invalid_provider_carries_original_string():
    with pytest.raises(InvalidProviderError) as ei:
        parse_provider("Open Router")
    assert ei.value.provider_string == "Open Router"  # nosec B101


def test_endpoints_and_names():
    assert endpoint(Cohere()) == COHERE_URL  # nosec B101
    assert endpoint(Anthropic()) == ANTHROPIC_URL  # nosec B101
    assert endpoint(Test(TestKind.DUMMY)) == ""  # nosec B101
    assert provider_name(Test(TestKind.STDIN)) == "test"  # nosec B101
    assert provider_name(OpenAiCompatible("http://x")) == "openai"  # nosec B101


def test_parse_openai_response_orders_choices_by_index():
    body = {
        "id": "r1",
        "choices": [
            {"index": 1, "message": {"role": "assistant", "content": "second"}},
            {"index": 0, "message": {"role": "assistant", "content": "first"}},
        ],
        "usage": {"prompt_tokens": 7, "completion_tokens": 3, "total_tokens": 10},
    }
    response, response_id = parse_response(OpenAiCompatible(), json.dumps(body))
    assert response.messages == ["first", "second"]  # nosec B101
    assert response.get_message(1) == "second"  # nosec B101
    assert (response.usage.input_tokens, response.usage.output_tokens) == (7, 3)  # nosec B101
    assert response_id == "r1"  # nosec B101


def test_parse_anthropic_response_keeps_text_blocks():
    body = {
        "id": "msg_1",
        "type": "message",
        "content": [{"type": "text", "text": "hello"}, {"type": "tool_use", "id": "t"}],
        "usage": {"input_tokens": 12, "output_tokens": 4},
    }
    response, _ = parse_response(Anthropic(), json.dumps(body))
    assert response.messages == ["hello"]  # nosec B101
    assert response.usage.input_tokens == 12  # nosec B101


def test_parse_cohere_response_prefers_tokens_over_billed_units():
    body = {
        "id": "c1",
        "finish_reason": "COMPLETE",
        "message": {"role": "assistant", "content": [{"type": "text", "text": "hi"}]},
        "usage": {
            "billed_units": {"input_tokens": 5, "output_tokens": 2},
            "tokens": {"input_tokens": 70.0, "output_tokens": 2.0},
        },
    }
    response, _ = parse_response(Cohere(), json.dumps(body))
    assert response.messages == ["hi"]  # nosec B101
    assert response.usage.input_tokens == 70  # nosec B101
    assert response.usage.output_tokens == 2  # nosec B101


@pytest.mark.parametrize("raw", ["not json", "{}", '{"choices": "nope"}', "[]"])
def test_malformed_bodies_become_malformed_response_errors(raw):
    with pytest.raises(MalformedResponseError) as ei:
        parse_response(OpenAiCompatible(), raw)
    assert ei.value.provider == "openai"  # nosec B101
    assert ei.value.retryable  # nosec B101


def test_get_message_out_of_range():
    response, _ = parse_response(OpenAiCompatible(), json.dumps({"choices": []}))
    with pytest.raises(IndexError):
        response.get_message(0)


@pytest.mark.parametrize("kind", list(TestKind))
def test_parse_response_on_test_binding_is_a_contract_violation(kind):
    with pytest.raises(ContractViolation):
        parse_response(Test(kind), '{"choices": []}')
