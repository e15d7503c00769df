"""Posts submitted filings to the spreadsheet-backed webhook."""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

import httpx

from presolve.core.config import WebhookConfig
from presolve.intake.models import SheetPayload

logger = logging.getLogger(__name__)


class DeliveryError(Exception):
    """The webhook call could not be completed."""


@runtime_checkable
class WebhookDelivery(Protocol):
    """Sends one payload; raises :class:`DeliveryError` on failure."""

    async def send(self, payload: SheetPayload) -> None: ...


class SheetWebhook:
    """HTTP POST of the JSON payload to the configured webhook URL.

    The response body is never read. Unless ``confirm_delivery`` is set, any
    response counts as delivered; only transport failures raise. No retries.
    """

    def __init__(
        self,
        config: WebhookConfig | None = None,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or WebhookConfig()
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(
            timeout=httpx.Timeout(self._config.timeout_seconds),
            follow_redirects=True,
        )

    async def send(self, payload: SheetPayload) -> None:
        try:
            resp = await self._http.post(
                self._config.url,
                json=payload.to_wire(),
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as exc:
            raise DeliveryError(f"Webhook request failed: {exc}") from exc

        logger.debug("Webhook responded %d", resp.status_code)
        if self._config.confirm_delivery and resp.is_error:
            raise DeliveryError(f"Webhook rejected filing with status {resp.status_code}")

    async def close(self) -> None:
        if self._owns_http:
            await self._http.aclose()
