"""Google Gemini provider using the Generative Language REST API."""

from __future__ import annotations

from typing import Any

from presolve.llm.client import HTTPLLMClient


class GeminiClient(HTTPLLMClient):
    """Talks to ``models/{model}:generateContent`` on the Gemini API."""

    def _auth_headers(self) -> dict[str, str]:
        if self.config.api_key:
            return {"x-goog-api-key": self.config.api_key}
        return {}

    @property
    def _model_path(self) -> str:
        return f"/v1beta/models/{self.config.model}"

    async def generate(
        self,
        prompt: str,
        *,
        system_prompt: str | None = None,
        temperature: float | None = None,
    ) -> str:
        return await self.chat(
            [{"role": "user", "content": prompt}],
            temperature=temperature,
            system_prompt=system_prompt,
        )

    async def chat(
        self,
        messages: list[dict],
        *,
        temperature: float | None = None,
        system_prompt: str | None = None,
    ) -> str:
        contents: list[dict[str, Any]] = []
        for message in messages:
            if message["role"] == "system":
                system_prompt = message["content"]
                continue
            # Gemini calls the assistant role "model".
            role = "model" if message["role"] == "assistant" else "user"
            contents.append({"role": role, "parts": [{"text": message["content"]}]})

        generation_config: dict[str, Any] = {
            "temperature": self._temperature(temperature),
            "maxOutputTokens": self.config.max_tokens,
        }
        if self.config.top_p is not None:
            generation_config["topP"] = self.config.top_p

        payload: dict[str, Any] = {
            "contents": contents,
            "generationConfig": generation_config,
        }
        if system_prompt is not None:
            payload["systemInstruction"] = {"parts": [{"text": system_prompt}]}

        resp = await self._request_with_retry(
            "POST", f"{self._model_path}:generateContent", json=payload
        )
        resp.raise_for_status()
        return self._extract_text(resp.json())

    async def is_available(self) -> bool:
        return await self._probe(self._model_path)

    @staticmethod
    def _extract_text(data: dict[str, Any]) -> str:
        """Concatenate the text parts of the first candidate; ``""`` if none."""
        candidates = data.get("candidates") or []
        if not candidates:
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts)
