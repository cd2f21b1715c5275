"""Catalog files: YAML/JSON loading, dumping and environment selection."""

from __future__ import annotations

import pytest

from polychat.base.errors import InvalidProviderError
from polychat.catalog import DEFAULT_MODELS, resolve
from polychat.config import static_lookup
from polychat.service.model_catalog_loader import dump_raw_models, load_models, load_raw_models

YAML_CATALOG = """
models:
  - name: local-llama
    api_name: llama3:8b
    api_provider: Open AI
    api_url: http://127.0.0.1:11434/v1/chat/completions
    input_price: 0
    output_price: 0
  - name: haiku
    api_name: claude-3-haiku-20240307
    can_read_images: true
    api_provider: anthropic
    input_price: 0.25
    output_price: 1.25
    api_timeout: 60
    api_env_var: ANTHROPIC_API_KEY
"""


def test_load_yaml_catalog(tmp_path):
    path = tmp_path / "models.yaml"
    path.write_text(YAML_CATALOG, encoding="utf-8")
    models = load_models(path)
    assert [m.name for m in models] == ["local-llama", "haiku"]  # nosec B101
    haiku = resolve(models, "haiku")
    assert haiku.dollars_per_1b_input_tokens == 250  # nosec B101
    assert haiku.api_timeout == 60  # nosec B101
    assert models[0].endpoint == "http://127.0.0.1:11434/v1/chat/completions"  # nosec B101


@pytest.mark.parametrize("suffix", [".yaml", ".json"])
def test_dump_then_load_yields_equal_records(tmp_path, suffix):
    path = tmp_path / f"catalog{suffix}"
    dump_raw_models(DEFAULT_MODELS, path)
    assert load_raw_models(path) == DEFAULT_MODELS  # nosec B101


def test_models_file_environment_variable(tmp_path):
    path = tmp_path / "env.yaml"
    path.write_text(YAML_CATALOG, encoding="utf-8")
    models = load_models(lookup=static_lookup({"POLYCHAT_MODELS_FILE": str(path)}))
    assert len(models) == 2  # nosec B101


def test_defaults_when_no_file_configured():
    models = load_models(lookup=static_lookup({}))
    assert [m.name for m in models] == [r.name for r in DEFAULT_MODELS]  # nosec B101


def test_bad_records_name_the_file_and_index(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("- name: x\n  api_provider: openai\n", encoding="utf-8")
    with pytest.raises(ValueError) as ei:
        load_raw_models(path)
    assert "model #0" in str(ei.value)  # nosec B101


def test_non_list_document_is_rejected(tmp_path):
    path = tmp_path / "scalar.yaml"
    path.write_text("just a string\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_raw_models(path)


def test_unknown_provider_surfaces_on_conversion(tmp_path):
    path = tmp_path / "gemini.yaml"
    path.write_text(
        "- {name: g, api_name: g, api_provider: gemini, input_price: 0, output_price: 0}\n", encoding="utf-8"
    )
    with pytest.raises(InvalidProviderError):
        load_models(path)
