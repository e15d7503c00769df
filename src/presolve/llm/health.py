"""Health check for the configured LLM provider."""

from __future__ import annotations

import logging
import time

from presolve.core.config import LLMConfig
from presolve.core.types import HealthStatus
from presolve.llm.client import create_llm_client

logger = logging.getLogger(__name__)


async def check_llm_health(config: LLMConfig) -> HealthStatus:
    """Probe the LLM backend and return a HealthStatus. Never raises."""
    service = f"llm:{config.provider}"
    try:
        client = create_llm_client(config)
    except ValueError as exc:
        return HealthStatus(service=service, healthy=False, details={"error": str(exc)})

    try:
        start = time.monotonic()
        available = await client.is_available()
        latency_ms = (time.monotonic() - start) * 1000

        return HealthStatus(
            service=service,
            healthy=available,
            latency_ms=round(latency_ms, 2),
            details={"base_url": config.base_url, "model": config.model},
        )
    except Exception as exc:
        logger.warning("LLM health check failed for %s: %s", config.provider, exc)
        return HealthStatus(service=service, healthy=False, details={"error": str(exc)})
    finally:
        await client.close()
