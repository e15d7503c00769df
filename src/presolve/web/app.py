"""FastAPI application for the Presolve dispute intake service.

Exposes filing sessions over a JSON API so any presentation layer can drive
the wizard without owning its state.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from presolve.core.config import Settings
from presolve.core.types import HealthStatus
from presolve.delivery.webhook import SheetWebhook, WebhookDelivery
from presolve.intake.controller import IntakeController
from presolve.intake.engine import load_wizard
from presolve.intake.store import FilingStore
from presolve.intake.validation import ValidationEngine
from presolve.llm.client import create_llm_client
from presolve.llm.health import check_llm_health
from presolve.summary.generator import SmartSummaryGenerator, Summarizer
from presolve.web.intake_router import router as intake_router

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str
    version: str = "0.1.0"


def create_app(
    settings: Settings | None = None,
    summarizer: Summarizer | None = None,
    delivery: WebhookDelivery | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Uses the factory pattern so tests can create isolated app instances
    with mock collaborators.

    Args:
        settings: Application settings. Defaults to Settings().
        summarizer: Optional pre-built summarizer. Defaults to an LLM-backed
            SmartSummaryGenerator for ``settings.llm``.
        delivery: Optional pre-built webhook delivery. Defaults to
            SheetWebhook for ``settings.webhook``.

    Returns:
        A configured FastAPI instance.
    """
    if settings is None:
        settings = Settings()

    logging.getLogger("presolve").setLevel(settings.log_level.upper())

    if summarizer is None:
        summarizer = SmartSummaryGenerator(
            create_llm_client(settings.llm), currency=settings.intake.currency_code
        )
    if delivery is None:
        delivery = SheetWebhook(settings.webhook)

    wizard = load_wizard(settings.intake.wizard_path)
    validation_engine = ValidationEngine()

    def new_filing() -> IntakeController:
        return IntakeController(
            summarizer=summarizer,
            delivery=delivery,
            wizard=wizard,
            validation_engine=validation_engine,
            currency_locale=settings.intake.currency_locale,
            currency_code=settings.intake.currency_code,
            min_processing_seconds=settings.intake.min_processing_seconds,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        for collaborator in (summarizer, delivery):
            close = getattr(collaborator, "close", None)
            if close is not None:
                await close()

    app = FastAPI(
        title="Presolve Dispute Intake",
        description="Multi-step dispute filing with AI case summaries",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.wizard = wizard
    app.state.filing_store = FilingStore(
        new_filing, idle_seconds=settings.intake.session_idle_seconds
    )

    app.include_router(intake_router)

    @app.get("/api/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy", service="presolve-intake")

    @app.get("/api/health/llm", response_model=HealthStatus)
    async def llm_health_check() -> HealthStatus:
        """Reachability of the summary LLM. Submission works without it."""
        return await check_llm_health(settings.llm)

    logger.debug("Intake app created for %s environment", settings.environment)
    return app
