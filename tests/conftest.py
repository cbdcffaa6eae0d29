"""Shared pytest fixtures for the hostlingo test suite.

Provides:
  - MockLLMProvider: scripted LLMProvider that records every call
  - test_settings: settings pinned to known values
  - bare_client: TestClient with no API key and no provider override
  - make_client: factory for TestClients backed by a given mock provider

All LLM calls are mocked in every test; no real SDK usage.
"""

from __future__ import annotations

from typing import Any, Iterator

import pytest
from fastapi.testclient import TestClient

from hostlingo.api.deps import get_llm_provider
from hostlingo.core.config import settings
from hostlingo.main import app
from hostlingo.services.llm.base import LLMProvider, LLMResponse


# ---------------------------------------------------------------------------
# Mock LLM Provider
# ---------------------------------------------------------------------------


class MockLLMProvider(LLMProvider):
    """Mock LLM provider for testing.

    Replies are consumed in order; once exhausted the last reply repeats.
    A reply that is an exception instance is raised instead of returned.
    """

    def __init__(self, replies: list[str | Exception] | None = None) -> None:
        self._replies = list(replies or ["Mock response"])
        self.generate_calls: list[dict[str, Any]] = []

    async def generate(
        self,
        prompt: str,
        system_prompt: str,
        max_tokens: int = 1000,
        temperature: float = 0.3,
        model: str | None = None,
    ) -> LLMResponse:
        self.generate_calls.append(
            {
                "prompt": prompt,
                "system_prompt": system_prompt,
                "max_tokens": max_tokens,
                "temperature": temperature,
                "model": model,
            }
        )
        index = min(len(self.generate_calls), len(self._replies)) - 1
        reply = self._replies[index]
        if isinstance(reply, Exception):
            raise reply
        return LLMResponse(text=reply, input_tokens=50, output_tokens=10)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def test_settings(monkeypatch: pytest.MonkeyPatch):
    """Pin the settings the API tests rely on, regardless of any local .env."""
    monkeypatch.setattr(settings, "openai_api_key", "")
    monkeypatch.setattr(settings, "host_lang", "ja")
    monkeypatch.setattr(settings, "default_guest_lang", "en")
    monkeypatch.setattr(settings, "guest_lang_cookie_name", "guest_lang")
    monkeypatch.setattr(settings, "guest_lang_cookie_max_age", 1800)
    monkeypatch.setattr(settings, "cookie_secure", True)
    monkeypatch.setattr(settings, "app_env", "test")
    monkeypatch.setattr(settings, "git_commit_sha", "abc1234")
    return settings


@pytest.fixture
def bare_client(test_settings) -> Iterator[TestClient]:
    """TestClient with no API key configured and no provider override."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_client(test_settings) -> Iterator[Any]:
    """Factory returning a TestClient whose LLM provider is the given mock."""
    clients: list[TestClient] = []

    def _make(llm: LLMProvider) -> TestClient:
        app.dependency_overrides[get_llm_provider] = lambda: llm
        test_client = TestClient(app)
        test_client.__enter__()
        clients.append(test_client)
        return test_client

    try:
        yield _make
    finally:
        for test_client in clients:
            test_client.__exit__(None, None, None)
        app.dependency_overrides.clear()
