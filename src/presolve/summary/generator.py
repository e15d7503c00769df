"""LLM-backed case summaries with a deterministic fallback.

The generator never raises: provider failures and malformed responses are
logged and replaced by :func:`fallback_summary`, so a filing is never blocked
by the summary step.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from presolve.intake.models import FormData
from presolve.llm.client import LLMClient

logger = logging.getLogger(__name__)

EMPTY_SUMMARY = "Summary generation failed."

_DESCRIPTION_EXCERPT = 100

_PROMPT_TEMPLATE = """\
As a legal analyst for Presolve360, provide a professional, one-paragraph \
executive summary of the following dispute for a case management sheet.

Details:
- Petitioner: {petitioner}
- Respondent: {respondent}
- Service Track: {track}
- Stakeholder Class: {stakeholder}
- Claim Value: {currency} {claim}
- Urgency: {urgency}
- Deadlines: {deadlines}
- Raw Description: {description}

The summary should be objective, formal, and focus on the core legal/commercial conflict.
Avoid bullet points. Max 100 words.
"""


@runtime_checkable
class Summarizer(Protocol):
    """Anything that turns a filing into a one-paragraph summary."""

    async def summarize(self, form: FormData) -> str: ...


def build_summary_prompt(form: FormData, currency: str = "INR") -> str:
    return _PROMPT_TEMPLATE.format(
        petitioner=form.petitioner_name,
        respondent=form.respondent_name,
        track=form.value_of("service_track"),
        stakeholder=form.value_of("stakeholder_type"),
        currency=currency,
        claim=form.claim_amount,
        urgency=form.value_of("urgency"),
        deadlines=form.deadline_details or "None specified",
        description=form.description,
    )


def fallback_summary(form: FormData, currency: str = "INR") -> str:
    """Summary used when the LLM call fails."""
    return (
        f"Case between {form.petitioner_name} and {form.respondent_name} "
        f"regarding a claim of {currency} {form.claim_amount}. "
        f"Description: {form.description[:_DESCRIPTION_EXCERPT]}..."
    )


class SmartSummaryGenerator:
    """Summarizer backed by an :class:`LLMClient`."""

    def __init__(self, llm: LLMClient, currency: str = "INR") -> None:
        self._llm = llm
        self._currency = currency

    async def summarize(self, form: FormData) -> str:
        prompt = build_summary_prompt(form, self._currency)
        try:
            text = await self._llm.generate(prompt)
        except Exception:
            logger.warning("Smart summary generation failed, using fallback", exc_info=True)
            return fallback_summary(form, self._currency)

        if not isinstance(text, str):
            logger.warning("Smart summary response was %s, using fallback", type(text).__name__)
            return fallback_summary(form, self._currency)
        return text.strip() or EMPTY_SUMMARY

    async def close(self) -> None:
        await self._llm.close()
