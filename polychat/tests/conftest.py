"""Pytest configuration for the polychat test suite.

Shared fixtures:

- ``catalog``: the built-in default models.
- ``sleeps``: a recording stand-in for ``asyncio.sleep``.
- ``make_model``: factory for OpenAI-compatible/Anthropic/Cohere test models.
- ``orchestrator_for``: builds a :class:`ChatOrchestrator` on top of an
  ``httpx.MockTransport`` handler, with fixed credentials and no real sleeps.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from polychat.base.models import Model, RawModelConfig
from polychat.catalog import default_models
from polychat.config import static_lookup
from polychat.service.orchestrator import ChatOrchestrator
from polychat.tests.utils import SleepRecorder


@pytest.fixture()
def catalog() -> List[Model]:
    return default_models()


@pytest.fixture()
def sleeps() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture()
def make_model() -> Callable[..., Model]:
    def _make(provider: str = "openai", **overrides: Any) -> Model:
        fields: Dict[str, Any] = {
            "name": f"{provider}-test",
            "api_name": f"{provider}-api",
            "api_provider": provider,
            "api_url": "https://llm.test/v1/chat/completions" if provider == "openai" else None,
            "input_price": 1.0,
            "output_price": 2.0,
            "api_env_var": "TEST_API_KEY",
        }
        fields.update(overrides)
        return RawModelConfig(**fields).to_model()

    return _make


@pytest.fixture()
def orchestrator_for(sleeps: SleepRecorder) -> Callable[..., ChatOrchestrator]:
    def _build(
        handler: Callable[[httpx.Request], httpx.Response],
        keys: Optional[Dict[str, str]] = None,
    ) -> ChatOrchestrator:
        return ChatOrchestrator(
            transport=httpx.MockTransport(handler),
            sleep=sleeps,
            key_lookup=static_lookup(keys if keys is not None else {"TEST_API_KEY": "sk-test"}),
        )

    return _build
