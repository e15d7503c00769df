"""OpenAI-compatible LLM provider (works with vLLM, llama-cpp-python, etc.)."""

from __future__ import annotations

from typing import Any

from presolve.llm.client import HTTPLLMClient


class OpenAICompatClient(HTTPLLMClient):
    """Talks to any server that exposes the OpenAI /v1/chat/completions API."""

    def _auth_headers(self) -> dict[str, str]:
        if self.config.api_key:
            return {"Authorization": f"Bearer {self.config.api_key}"}
        return {}

    async def generate(
        self,
        prompt: str,
        *,
        system_prompt: str | None = None,
        temperature: float | None = None,
    ) -> str:
        messages: list[dict] = []
        if system_prompt is not None:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})
        return await self.chat(messages, temperature=temperature)

    async def chat(
        self,
        messages: list[dict],
        *,
        temperature: float | None = None,
    ) -> str:
        payload: dict[str, Any] = {
            "model": self.config.model,
            "messages": messages,
            "temperature": self._temperature(temperature),
            "stream": False,
            "max_tokens": self.config.max_tokens,
        }
        if self.config.top_p is not None:
            payload["top_p"] = self.config.top_p

        resp = await self._request_with_retry("POST", "/v1/chat/completions", json=payload)
        resp.raise_for_status()
        data = resp.json()
        return data["choices"][0]["message"]["content"] or ""

    async def is_available(self) -> bool:
        return await self._probe("/v1/models")
