"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from presolve.intake.controller import IntakeController
from presolve.intake.models import FormData, SheetPayload


class StaticSummarizer:
    """Summarizer that returns a fixed text and records what it saw."""

    def __init__(self, text: str = "A concise summary.") -> None:
        self.text = text
        self.calls: list[FormData] = []

    async def summarize(self, form: FormData) -> str:
        self.calls.append(form.model_copy())
        return self.text


class FailingSummarizer:
    async def summarize(self, form: FormData) -> str:
        raise RuntimeError("summary service unavailable")


class RecordingDelivery:
    """Webhook stand-in that keeps every payload it is asked to send."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.payloads: list[SheetPayload] = []

    async def send(self, payload: SheetPayload) -> None:
        self.payloads.append(payload)
        if self.error is not None:
            raise self.error


def fill_all_steps(controller: IntakeController) -> None:
    """Populate every required field with valid values."""
    controller.update_field("stakeholder_type", "Individual")
    controller.update_field("service_track", "Mediation")
    controller.update_field("petitioner_name", "Asha Traders")
    controller.update_field("respondent_name", "Kiran Finance Ltd")
    controller.set_claim_amount("7,00,000")
    controller.update_field("description", "Unpaid invoices for goods delivered in March.")
    controller.update_field("urgency", "High")


def complete_filing(controller: IntakeController) -> None:
    """Fill every step and walk the controller to the final one."""
    fill_all_steps(controller)
    while controller.advance():
        pass


@pytest.fixture
def summarizer():
    return StaticSummarizer()


@pytest.fixture
def delivery():
    return RecordingDelivery()


@pytest.fixture
def controller(summarizer, delivery):
    return IntakeController(
        summarizer=summarizer,
        delivery=delivery,
        min_processing_seconds=0,
    )
