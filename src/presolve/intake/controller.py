"""Step-wise dispute filing controller.

One :class:`IntakeController` owns the state of one filing session: the form
data, the touched fields, the wizard position and the submission flags. It
never renders anything; a presentation layer reads :meth:`snapshot` and calls
the operations in response to user input.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any

from presolve.delivery.webhook import WebhookDelivery
from presolve.intake import formatting
from presolve.intake.engine import FIRST_STEP, load_wizard
from presolve.intake.models import (
    FilingSnapshot,
    FormData,
    SheetPayload,
    ValidationResult,
    WizardDefinition,
)
from presolve.intake.validation import ValidationEngine
from presolve.intake.validators.common import REQUIRED_MESSAGE
from presolve.summary.generator import Summarizer, fallback_summary

logger = logging.getLogger(__name__)

SUBMISSION_ERROR = "Error processing filing. Please try again."


class IntakeController:
    """Form state machine over the steps of a wizard definition.

    Args:
        summarizer: Produces the smart summary. Failures fall back to a
            deterministic summary built from the form.
        delivery: Sends the final payload to the webhook.
        wizard: Wizard definition. Defaults to the bundled dispute wizard.
        validation_engine: Validator registry. Defaults to presence checks.
        currency_locale: Grouping style for the claim amount display.
        min_processing_seconds: Minimum time the submission stays in the
            processing state after the webhook call returns.
    """

    def __init__(
        self,
        summarizer: Summarizer,
        delivery: WebhookDelivery,
        wizard: WizardDefinition | None = None,
        validation_engine: ValidationEngine | None = None,
        *,
        currency_locale: str = "en-IN",
        currency_code: str = "INR",
        min_processing_seconds: float = 3.0,
        session_id: str | None = None,
    ) -> None:
        self._summarizer = summarizer
        self._delivery = delivery
        self._wizard = wizard or load_wizard()
        self._validation = validation_engine or ValidationEngine()
        self._locale = currency_locale
        self._currency = currency_code
        self._min_processing_seconds = min_processing_seconds

        self.session_id = session_id or str(uuid.uuid4())
        self.form = FormData()
        self.touched: dict[str, bool] = {}
        self.step = FIRST_STEP
        self.submitting = False
        self.success = False
        self.support_visible = False
        self.error: str | None = None
        self.last_payload: SheetPayload | None = None

    @property
    def wizard(self) -> WizardDefinition:
        return self._wizard

    @property
    def last_step(self) -> int:
        return len(self._wizard.steps)

    # -- field input ---------------------------------------------------------

    def update_field(self, field: str, value: Any) -> None:
        """Store one field value.

        Raises:
            KeyError: If ``field`` is not a form field.
            ValueError: If ``value`` is not a valid choice for the field.
        """
        if field not in FormData.model_fields:
            raise KeyError(f"Unknown field: {field!r}")
        if field == "claim_amount":
            self.set_claim_amount("" if value is None else str(value))
            return
        setattr(self.form, field, value)

    def mark_touched(self, *fields: str) -> None:
        """Touch every name in ``fields``, or none of them if one is unknown."""
        unknown = [f for f in fields if f not in FormData.model_fields]
        if unknown:
            raise KeyError(f"Unknown field: {unknown[0]!r}")
        for field in fields:
            self.touched[field] = True

    def set_claim_amount(self, keystrokes: str) -> str:
        """Store the digits of ``keystrokes`` and return the display string."""
        raw, display = formatting.format_currency_input(keystrokes or "", self._locale)
        self.form.claim_amount = raw
        return display

    @property
    def claim_display(self) -> str:
        return formatting.format_amount(self.form.claim_amount, self._locale)

    def set_deadline_date(self, date: str) -> None:
        """Replace the date half of the deadline.

        Raises:
            ValueError: If ``date`` is not empty and not ``YYYY-MM-DD``.
        """
        if date and not formatting.is_iso_date(date):
            raise ValueError(f"Deadline date must be YYYY-MM-DD, got {date!r}")
        self.form.deadline_details = formatting.with_deadline_date(
            self.form.deadline_details, date or ""
        )

    def set_deadline_note(self, note: str) -> None:
        self.form.deadline_details = formatting.with_deadline_note(
            self.form.deadline_details, note or ""
        )

    @property
    def deadline_date(self) -> str:
        return formatting.deadline_date(self.form.deadline_details)

    @property
    def deadline_note(self) -> str:
        return formatting.deadline_note(self.form.deadline_details)

    # -- validation ----------------------------------------------------------

    def validate_step(self, step: int) -> ValidationResult:
        return self._validation.validate_step(self._wizard.step(step), self.form)

    def is_step_valid(self, step: int) -> bool:
        return self.validate_step(step).valid

    def field_error(self, field: str) -> str | None:
        """Inline error for ``field``: only once touched, only when empty."""
        if not self.touched.get(field):
            return None
        if not self.form.value_of(field):
            return REQUIRED_MESSAGE
        return None

    # -- navigation ----------------------------------------------------------

    def advance(self) -> bool:
        """Move to the next step if the current one is complete.

        The current step's required fields are marked touched first, so a
        blocked attempt surfaces their errors. Returns True if the step moved.
        """
        if self.step >= self.last_step:
            return False
        self.mark_touched(*self._wizard.step(self.step).required_fields)
        if not self.is_step_valid(self.step):
            logger.debug("Filing %s blocked at step %d", self.session_id, self.step)
            return False
        self.step = min(self.step + 1, self.last_step)
        return True

    def back(self) -> bool:
        if self.step <= FIRST_STEP:
            return False
        self.step = max(self.step - 1, FIRST_STEP)
        return True

    # -- support panel -------------------------------------------------------

    def show_support(self) -> None:
        self.support_visible = True

    def hide_support(self) -> None:
        self.support_visible = False

    # -- submission ----------------------------------------------------------

    async def submit(self, min_processing_seconds: float | None = None) -> bool:
        """Summarize, deliver and mark the filing successful.

        Returns True once the success state is reached. Validation failures
        return False with no side effect beyond touching the final step's
        fields; delivery failures set :attr:`error` and return False. Nothing
        raised by the collaborators escapes.
        """
        if self.submitting or self.success:
            return self.success
        if self.step != self.last_step:
            return False

        self.mark_touched(*self._wizard.step(self.last_step).required_fields)
        if not self.is_step_valid(self.last_step):
            return False

        delay = self._min_processing_seconds
        if min_processing_seconds is not None:
            delay = min_processing_seconds
        self.submitting = True
        self.error = None
        try:
            summary = await self._summarize()
            payload = SheetPayload.from_form(self.form, summary)
            self.last_payload = payload
            await self._delivery.send(payload)
            if delay > 0:
                await asyncio.sleep(delay)
            self.success = True
            logger.info("Filing %s submitted", self.session_id)
        except Exception:
            logger.exception("Filing %s failed to submit", self.session_id)
            self.error = SUBMISSION_ERROR
        finally:
            self.submitting = False
        return self.success

    async def _summarize(self) -> str:
        try:
            return await self._summarizer.summarize(self.form)
        except Exception:
            logger.warning(
                "Summarizer failed for filing %s, using fallback", self.session_id, exc_info=True
            )
            return fallback_summary(self.form, self._currency)

    def dismiss_error(self) -> None:
        self.error = None

    def reset(self) -> None:
        """Start a fresh filing in the same session."""
        self.form = FormData()
        self.touched = {}
        self.step = FIRST_STEP
        self.success = False
        self.error = None
        self.last_payload = None

    # -- views ---------------------------------------------------------------

    def field_errors(self) -> dict[str, str]:
        errors: dict[str, str] = {}
        for field in FormData.model_fields:
            err = self.field_error(field)
            if err is not None:
                errors[field] = err
        return errors

    def snapshot(self) -> FilingSnapshot:
        return FilingSnapshot(
            session_id=self.session_id,
            step=self.step,
            total_steps=self.last_step,
            form=self.form.model_copy(),
            touched=sorted(f for f, flag in self.touched.items() if flag),
            step_valid={s.number: self.is_step_valid(s.number) for s in self._wizard.steps},
            errors=self.field_errors(),
            claim_display=self.claim_display,
            deadline_date=self.deadline_date,
            deadline_note=self.deadline_note,
            submitting=self.submitting,
            success=self.success,
            support_visible=self.support_visible,
            error=self.error,
        )
