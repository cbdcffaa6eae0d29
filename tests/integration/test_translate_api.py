"""End-to-end API tests for the translation routes.

Tests:
  - Diagnostics: /health, /api/ping, GET /api/translate, /api/locales
  - Request validation: malformed JSON, non-object JSON, missing/blank text,
    bad role/tone/locale, unknown legacy mode → 400 {ok: false}
  - Missing API key → 500; upstream status passthrough (401, 429)
  - guest_lang cookie: set on guest messages, used as host reply target,
    invalid cookie falls back to the default
"""

from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from hostlingo.core.exceptions import UpstreamLLMError
from tests.conftest import MockLLMProvider


def _assert_failure(response: Any, status_code: int) -> dict[str, Any]:
    assert response.status_code == status_code
    body = response.json()
    assert body["ok"] is False
    assert isinstance(body["error"], str) and body["error"]
    return body


class TestDiagnostics:
    def test_health(self, bare_client: TestClient) -> None:
        response = bare_client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_ping_reports_environment(self, bare_client: TestClient) -> None:
        response = bare_client.get("/api/ping")
        assert response.status_code == 200
        assert response.json() == {
            "ok": True,
            "route": "/api/ping",
            "env": "test",
            "commit": "abc1234",
        }

    def test_translate_get_without_key(self, bare_client: TestClient) -> None:
        response = bare_client.get("/api/translate")
        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert body["endpoint"] == "/api/translate"
        assert body["hostLang"] == "ja"
        assert body["hasApiKey"] is False

    def test_locales(self, bare_client: TestClient) -> None:
        response = bare_client.get("/api/locales")
        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        codes = [locale["code"] for locale in body["locales"]]
        assert codes[0] == "en-US-west"
        assert "zh-Hant" in codes
        west = body["locales"][0]
        assert west["lang"] == "en-US"


class TestValidation:
    def test_malformed_json(self, make_client) -> None:
        client = make_client(MockLLMProvider())
        response = client.post(
            "/api/translate",
            content=b'{"text": "hello"',
            headers={"Content-Type": "application/json"},
        )
        body = _assert_failure(response, 400)
        assert body["code"] == "INVALID_JSON"

    def test_empty_body(self, make_client) -> None:
        client = make_client(MockLLMProvider())
        response = client.post("/api/translate", content=b"")
        _assert_failure(response, 400)

    def test_json_array_is_rejected(self, make_client) -> None:
        client = make_client(MockLLMProvider())
        response = client.post("/api/translate", json=["hello"])
        body = _assert_failure(response, 400)
        assert body["code"] == "INVALID_JSON"

    def test_missing_text(self, make_client) -> None:
        llm = MockLLMProvider()
        client = make_client(llm)
        response = client.post("/api/translate", json={"role": "guest"})
        body = _assert_failure(response, 400)
        assert body["code"] == "INVALID_REQUEST"
        assert body["error"].startswith("text")
        assert llm.generate_calls == []

    def test_blank_text(self, make_client) -> None:
        client = make_client(MockLLMProvider())
        response = client.post("/api/translate", json={"text": "   \n"})
        body = _assert_failure(response, 400)
        assert body["error"] == "text: text is required"

    def test_non_string_text(self, make_client) -> None:
        client = make_client(MockLLMProvider())
        response = client.post("/api/translate", json={"text": 42})
        _assert_failure(response, 400)

    @pytest.mark.parametrize(
        "payload",
        [
            {"text": "hi", "role": "concierge"},
            {"text": "hi", "tone": "sarcastic"},
            {"text": "hi", "targetLocale": "not a locale"},
            {"text": "hi", "guestLang": "???"},
        ],
    )
    def test_invalid_fields(self, make_client, payload: dict[str, Any]) -> None:
        client = make_client(MockLLMProvider())
        body = _assert_failure(client.post("/api/translate", json=payload), 400)
        assert body["code"] == "INVALID_REQUEST"

    def test_unknown_mode(self, make_client) -> None:
        client = make_client(MockLLMProvider())
        response = client.post("/api/translate", json={"text": "hi", "mode": "sideways"})
        body = _assert_failure(response, 400)
        assert body == {"ok": False, "error": "invalid mode", "code": "INVALID_MODE"}

    def test_unknown_mode_with_explicit_role(self, make_client) -> None:
        llm = MockLLMProvider(["こんにちは"])
        client = make_client(llm)
        response = client.post(
            "/api/translate",
            json={"text": "hi", "role": "guest", "mode": "sideways", "sourceLocale": "en"},
        )
        body = _assert_failure(response, 400)
        assert body["code"] == "INVALID_MODE"
        assert llm.generate_calls == []


class TestApiKey:
    def test_missing_key_returns_500(self, bare_client: TestClient) -> None:
        response = bare_client.post("/api/translate", json={"text": "Hello"})
        body = _assert_failure(response, 500)
        assert body["code"] == "MISSING_API_KEY"
        assert "OPENAI_API_KEY" in body["error"]

    def test_malformed_json_is_reported_before_missing_key(self, bare_client: TestClient) -> None:
        response = bare_client.post(
            "/api/translate",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )
        _assert_failure(response, 400)

    def test_unknown_mode_is_reported_before_missing_key(self, bare_client: TestClient) -> None:
        response = bare_client.post("/api/translate", json={"text": "hi", "mode": "sideways"})
        body = _assert_failure(response, 400)
        assert body["code"] == "INVALID_MODE"

    def test_upstream_auth_error_passes_through(self, make_client) -> None:
        llm = MockLLMProvider([UpstreamLLMError("Incorrect API key provided", status_code=401)])
        client = make_client(llm)
        response = client.post("/api/translate", json={"text": "Hello"})
        body = _assert_failure(response, 401)
        assert body["error"] == "Incorrect API key provided"
        assert body["code"] == "UPSTREAM_ERROR"

    def test_upstream_rate_limit_passes_through(self, make_client) -> None:
        llm = MockLLMProvider([UpstreamLLMError("Rate limit reached", status_code=429)])
        client = make_client(llm)
        response = client.post("/api/translate", json={"text": "Hello", "role": "host"})
        _assert_failure(response, 429)
        assert "set-cookie" not in response.headers


class TestGuestMessage:
    def test_success_shape_and_cookie(self, make_client) -> None:
        llm = MockLLMProvider(["fr", "明日、チェックインを早めることはできますか？"])
        client = make_client(llm)

        response = client.post(
            "/api/translate",
            json={"text": "Puis-je arriver plus tôt demain ?"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "ok": True,
            "text": "明日、チェックインを早めることはできますか？",
            "role": "guest",
            "sourceLang": "fr",
            "targetLang": "ja",
            "targetLocale": "ja",
            "tone": "neutral",
            "retried": False,
        }

        cookie = response.headers["set-cookie"]
        assert cookie.startswith("guest_lang=fr;")
        attributes = [part.strip().lower() for part in cookie.split(";")]
        assert "path=/" in attributes
        assert "max-age=1800" in attributes
        assert "samesite=lax" in attributes
        assert "secure" in attributes

    def test_retry_flag(self, make_client) -> None:
        llm = MockLLMProvider(["Where is the key?", "鍵はどこですか？"])
        client = make_client(llm)

        response = client.post(
            "/api/translate",
            json={"text": "Where is the key?", "mode": "to_ja", "sourceLocale": "en"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["retried"] is True
        assert body["text"] == "鍵はどこですか？"
        assert len(llm.generate_calls) == 2


class TestHostReply:
    def test_cookie_language_is_used_as_target(self, make_client) -> None:
        llm = MockLLMProvider(["Claro, la cesta está junto a la puerta."])
        client = make_client(llm)

        response = client.post(
            "/api/translate",
            json={"text": "もちろんです。カゴはドアの横です。", "role": "host"},
            headers={"Cookie": "guest_lang=es"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["role"] == "host"
        assert body["sourceLang"] == "ja"
        assert body["targetLang"] == "es"
        assert body["text"] == "Claro, la cesta está junto a la puerta."
        assert len(llm.generate_calls) == 1
        assert response.headers["set-cookie"].startswith("guest_lang=es;")

    def test_invalid_cookie_falls_back_to_default(self, make_client) -> None:
        llm = MockLLMProvider(["Of course."])
        client = make_client(llm)

        response = client.post(
            "/api/translate",
            json={"text": "もちろんです。", "mode": "from_ja"},
            headers={"Cookie": "guest_lang=%%%"},
        )

        assert response.status_code == 200
        assert response.json()["targetLang"] == "en"

    def test_explicit_target_beats_cookie(self, make_client) -> None:
        llm = MockLLMProvider(["Natürlich."])
        client = make_client(llm)

        response = client.post(
            "/api/translate",
            json={
                "text": "もちろんです。",
                "role": "host",
                "tone": "formal",
                "targetLocale": "de-CH",
            },
            headers={"Cookie": "guest_lang=es"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["targetLocale"] == "de-CH"
        assert body["targetLang"] == "de-CH"
        assert body["tone"] == "formal"
        assert "Swiss" in llm.generate_calls[0]["prompt"]
