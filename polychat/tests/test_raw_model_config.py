"""Conversion between the human-edited RawModelConfig and Model."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from polychat.base.errors import InvalidProviderError
from polychat.base.models import Model, RawModelConfig
from polychat.base.provider_binding import Anthropic, Cohere, OpenAiCompatible
from polychat.catalog import DEFAULT_MODELS
from polychat.config.defaults import ANTHROPIC_URL, OPENAI_DEFAULT_URL


def test_prices_are_scaled_and_rounded():
    raw = RawModelConfig(
        name="m", api_name="m", api_provider="openai", input_price=0.0006, output_price=1.2344
    )
    model = raw.to_model()
    assert model.dollars_per_1b_input_tokens == 1  # nosec B101 - 0.6 rounds to nearest
    assert model.dollars_per_1b_output_tokens == 1234  # nosec B101


def test_timeout_defaults_to_180_seconds():
    raw = RawModelConfig(name="m", api_name="m", api_provider="cohere", input_price=0, output_price=0)
    assert raw.to_model().api_timeout == 180  # nosec B101


@pytest.mark.parametrize("raw", DEFAULT_MODELS, ids=lambda r: r.name)
def test_round_trip_preserves_identity_and_price(raw):
    model = raw.to_model()
    back = RawModelConfig.from_model(model).to_model()
    assert back == model  # nosec B101
    again = RawModelConfig.from_model(back)
    assert abs(again.input_price - raw.input_price) <= 0.001  # nosec B101
    assert abs(again.output_price - raw.output_price) <= 0.001  # nosec B101


def test_from_model_always_writes_endpoint():
    model = RawModelConfig(
        name="sonnet", api_name="claude", api_provider="Anthropic", input_price=3, output_price=15
    ).to_model()
    raw = RawModelConfig.from_model(model)
    assert raw.api_provider == "anthropic"  # nosec B101
    assert raw.api_url == ANTHROPIC_URL  # nosec B101
    assert isinstance(model.binding, Anthropic)  # nosec B101


def test_endpoint_override_only_applies_to_openai():
    openai = RawModelConfig(
        name="a", api_name="a", api_provider="openai", api_url="http://local/v1", input_price=0, output_price=0
    ).to_model()
    cohere = RawModelConfig(
        name="b", api_name="b", api_provider="cohere", api_url="http://ignored", input_price=0, output_price=0
    ).to_model()
    default_openai = RawModelConfig(
        name="c", api_name="c", api_provider="openai", input_price=0, output_price=0
    ).to_model()
    assert openai.binding == OpenAiCompatible("http://local/v1")  # nosec B101
    assert cohere.binding == Cohere()  # nosec B101
    assert default_openai.endpoint == OPENAI_DEFAULT_URL  # nosec B101


def test_unknown_provider_fails_conversion():
    raw = RawModelConfig(name="m", api_name="m", api_provider="gemini", input_price=0, output_price=0)
    with pytest.raises(InvalidProviderError) as ei:
        raw.to_model()
    assert ei.value.provider_string == "gemini"  # nosec B101


def test_unknown_fields_are_rejected():
    with pytest.raises(ValidationError):
        RawModelConfig.model_validate(
            {"name": "m", "api_name": "m", "api_provider": "openai", "input_price": 0, "output_price": 0, "typo": 1}
        )


def test_test_models_are_zero_cost():
    for model in (Model.dummy(), Model.stdin()):
        assert model.api_name == ""  # nosec B101
        assert model.dollars_per_1b_output_tokens == 0  # nosec B101
        assert model.api_timeout == 180  # nosec B101
        assert model.is_test()  # nosec B101
