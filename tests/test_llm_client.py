"""Unit tests for the LLM client abstraction layer."""

from __future__ import annotations

import json

import httpx
import pytest

from presolve.core.config import LLMConfig
from presolve.llm.client import create_llm_client
from presolve.llm.health import check_llm_health
from presolve.llm.providers.gemini import GeminiClient
from presolve.llm.providers.openai_compat import OpenAICompatClient

GEMINI_URL = (
    "https://generativelanguage.googleapis.com"
    "/v1beta/models/gemini-3-flash-preview:generateContent"
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _gemini_config(**overrides) -> LLMConfig:
    defaults = {"provider": "gemini", "api_key": "test-key"}
    defaults.update(overrides)
    return LLMConfig(**defaults)


def _openai_config(**overrides) -> LLMConfig:
    defaults = {"provider": "openai", "base_url": "http://localhost:8000", "model": "mistral"}
    defaults.update(overrides)
    return LLMConfig(**defaults)


def _gemini_reply(*texts: str) -> dict:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": t} for t in texts]}}]}


# ---------------------------------------------------------------------------
# Factory tests
# ---------------------------------------------------------------------------

class TestFactory:
    def test_default_provider_is_gemini(self):
        assert isinstance(create_llm_client(LLMConfig()), GeminiClient)

    def test_creates_openai_client(self):
        assert isinstance(create_llm_client(_openai_config()), OpenAICompatClient)

    def test_creates_vllm_client(self):
        assert isinstance(create_llm_client(_openai_config(provider="vllm")), OpenAICompatClient)

    def test_provider_name_is_case_insensitive(self):
        assert isinstance(create_llm_client(_gemini_config(provider="Gemini")), GeminiClient)

    def test_unknown_provider_raises(self):
        with pytest.raises(ValueError, match="Unknown LLM provider"):
            create_llm_client(_gemini_config(provider="nope"))


# ---------------------------------------------------------------------------
# Gemini provider tests
# ---------------------------------------------------------------------------

class TestGeminiClient:
    @pytest.mark.asyncio
    async def test_generate(self, httpx_mock):
        httpx_mock.add_response(url=GEMINI_URL, method="POST", json=_gemini_reply("Hello ", "there"))
        client = GeminiClient(_gemini_config())
        try:
            assert await client.generate("Say hello") == "Hello there"

            request = httpx_mock.get_request()
            assert request.headers["x-goog-api-key"] == "test-key"
            body = json.loads(request.content)
            assert body["contents"] == [{"role": "user", "parts": [{"text": "Say hello"}]}]
            assert body["generationConfig"]["temperature"] == 0.2
            assert "systemInstruction" not in body
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_chat_maps_roles_and_system_prompt(self, httpx_mock):
        httpx_mock.add_response(url=GEMINI_URL, method="POST", json=_gemini_reply("ok"))
        client = GeminiClient(_gemini_config(top_p=0.9))
        try:
            await client.chat(
                [
                    {"role": "system", "content": "Be formal."},
                    {"role": "user", "content": "Hi"},
                    {"role": "assistant", "content": "Hello"},
                    {"role": "user", "content": "Summarize"},
                ],
                temperature=0.5,
            )
            body = json.loads(httpx_mock.get_request().content)
            assert [c["role"] for c in body["contents"]] == ["user", "model", "user"]
            assert body["systemInstruction"] == {"parts": [{"text": "Be formal."}]}
            assert body["generationConfig"]["temperature"] == 0.5
            assert body["generationConfig"]["topP"] == 0.9
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_no_candidates_returns_empty(self, httpx_mock):
        httpx_mock.add_response(url=GEMINI_URL, method="POST", json={"candidates": []})
        client = GeminiClient(_gemini_config())
        try:
            assert await client.generate("Say hello") == ""
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_client_error_raises(self, httpx_mock):
        httpx_mock.add_response(url=GEMINI_URL, method="POST", status_code=403)
        client = GeminiClient(_gemini_config())
        try:
            with pytest.raises(httpx.HTTPStatusError):
                await client.generate("Say hello")
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_is_available_false_on_error(self, httpx_mock):
        httpx_mock.add_exception(httpx.ConnectError("refused"))
        client = GeminiClient(_gemini_config())
        try:
            assert await client.is_available() is False
        finally:
            await client.close()


# ---------------------------------------------------------------------------
# OpenAI-compatible provider tests
# ---------------------------------------------------------------------------

class TestOpenAICompatClient:
    @pytest.mark.asyncio
    async def test_generate_with_system_prompt(self, httpx_mock):
        httpx_mock.add_response(
            url="http://localhost:8000/v1/chat/completions",
            method="POST",
            json={"choices": [{"message": {"role": "assistant", "content": "Summary"}}]},
        )
        client = OpenAICompatClient(_openai_config(api_key="sk-test"))
        try:
            result = await client.generate("Summarize", system_prompt="Be brief.")
            assert result == "Summary"

            request = httpx_mock.get_request()
            assert request.headers["Authorization"] == "Bearer sk-test"
            body = json.loads(request.content)
            assert body["messages"][0] == {"role": "system", "content": "Be brief."}
            assert body["model"] == "mistral"
            assert body["temperature"] == 0.2
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_retries_server_error(self, httpx_mock):
        url = "http://localhost:8000/v1/chat/completions"
        httpx_mock.add_response(url=url, method="POST", status_code=503)
        httpx_mock.add_response(
            url=url,
            method="POST",
            json={"choices": [{"message": {"content": "Recovered"}}]},
        )
        client = OpenAICompatClient(_openai_config(max_retries=1))
        try:
            assert await client.generate("Summarize") == "Recovered"
            assert len(httpx_mock.get_requests()) == 2
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_is_available_true(self, httpx_mock):
        httpx_mock.add_response(url="http://localhost:8000/v1/models", method="GET", json={"data": []})
        client = OpenAICompatClient(_openai_config())
        try:
            assert await client.is_available() is True
        finally:
            await client.close()


# ---------------------------------------------------------------------------
# Health check tests
# ---------------------------------------------------------------------------

class TestHealthCheck:
    @pytest.mark.asyncio
    async def test_healthy_gemini(self, httpx_mock):
        httpx_mock.add_response(
            url="https://generativelanguage.googleapis.com/v1beta/models/gemini-3-flash-preview",
            method="GET",
            json={"name": "models/gemini-3-flash-preview"},
        )
        status = await check_llm_health(_gemini_config())
        assert status.service == "llm:gemini"
        assert status.healthy is True
        assert status.latency_ms is not None
        assert status.details["model"] == "gemini-3-flash-preview"

    @pytest.mark.asyncio
    async def test_unreachable_backend_is_unhealthy(self, httpx_mock):
        httpx_mock.add_exception(httpx.ConnectError("refused"))
        status = await check_llm_health(_openai_config())
        assert status.service == "llm:openai"
        assert status.healthy is False

    @pytest.mark.asyncio
    async def test_unknown_provider_reports_error(self):
        status = await check_llm_health(_gemini_config(provider="nonexistent"))
        assert status.healthy is False
        assert "error" in status.details
