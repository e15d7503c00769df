"""Abstract LLM client interface, shared HTTP plumbing and factory function."""

from __future__ import annotations

import abc
import asyncio
import logging
from typing import Any

import httpx

from presolve.core.config import LLMConfig

logger = logging.getLogger(__name__)


class LLMClient(abc.ABC):
    """Abstract base class for LLM providers."""

    def __init__(self, config: LLMConfig) -> None:
        self.config = config

    @abc.abstractmethod
    async def generate(
        self,
        prompt: str,
        *,
        system_prompt: str | None = None,
        temperature: float | None = None,
    ) -> str:
        """Generate a completion from a single prompt.

        ``temperature`` falls back to ``config.temperature`` when omitted.
        """

    @abc.abstractmethod
    async def chat(
        self,
        messages: list[dict],
        *,
        temperature: float | None = None,
    ) -> str:
        """Generate a response from a list of chat messages."""

    @abc.abstractmethod
    async def is_available(self) -> bool:
        """Return True if the provider is reachable."""

    async def close(self) -> None:
        """Clean up resources. Override if the provider holds connections."""

    def _temperature(self, temperature: float | None) -> float:
        return self.config.temperature if temperature is None else temperature


class HTTPLLMClient(LLMClient):
    """Base for providers reached over a JSON HTTP API.

    Owns the ``httpx.AsyncClient`` and retries 5xx responses and transport
    errors ``config.max_retries`` times with exponential backoff.
    """

    def __init__(self, config: LLMConfig) -> None:
        super().__init__(config)
        self._http = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=httpx.Timeout(config.timeout_seconds),
            headers=self._auth_headers(),
        )

    def _auth_headers(self) -> dict[str, str]:
        return {}

    async def close(self) -> None:
        await self._http.aclose()

    async def _probe(self, path: str) -> bool:
        try:
            r = await self._http.get(path)
            return r.status_code == 200
        except httpx.HTTPError:
            return False

    async def _request_with_retry(
        self,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Execute an HTTP request with retry on 5xx and transport errors."""
        max_attempts = max(1, self.config.max_retries + 1)
        last_resp: httpx.Response | None = None

        for attempt in range(max_attempts):
            try:
                resp = await self._http.request(method, url, **kwargs)
                # Don't retry on client errors (4xx)
                if resp.status_code < 500:
                    return resp
                last_resp = resp
                if attempt < max_attempts - 1:
                    delay = 0.5 * (2 ** attempt)
                    logger.warning(
                        "Request to %s returned %d, retrying in %.1fs (%d/%d)",
                        url, resp.status_code, delay, attempt + 1, max_attempts,
                    )
                    await asyncio.sleep(delay)
                    continue
                return resp
            except httpx.TransportError as exc:
                if attempt < max_attempts - 1:
                    delay = 0.5 * (2 ** attempt)
                    logger.warning(
                        "Transport error on %s: %s, retrying in %.1fs (%d/%d)",
                        url, exc, delay, attempt + 1, max_attempts,
                    )
                    await asyncio.sleep(delay)
                    continue
                raise

        return last_resp  # type: ignore[return-value]


def create_llm_client(config: LLMConfig) -> LLMClient:
    """Factory: select and instantiate an LLM provider based on config.provider."""

    from presolve.llm.providers import PROVIDER_REGISTRY

    provider = config.provider.lower()
    if provider not in PROVIDER_REGISTRY:
        available = ", ".join(sorted(PROVIDER_REGISTRY))
        raise ValueError(
            f"Unknown LLM provider {config.provider!r}. "
            f"Available: {available}"
        )

    cls = PROVIDER_REGISTRY[provider]
    return cls(config)
