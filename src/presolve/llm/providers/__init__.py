"""Provider registry for LLM backends."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from presolve.llm.client import LLMClient

from presolve.llm.providers.gemini import GeminiClient
from presolve.llm.providers.openai_compat import OpenAICompatClient

PROVIDER_REGISTRY: dict[str, type[LLMClient]] = {
    "gemini": GeminiClient,
    "openai": OpenAICompatClient,
    "vllm": OpenAICompatClient,
}


__all__ = ["PROVIDER_REGISTRY", "GeminiClient", "OpenAICompatClient"]
