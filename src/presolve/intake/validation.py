"""Validation engine for intake wizard steps."""

from __future__ import annotations

from typing import Any, Callable

from presolve.intake.models import FieldDefinition, FormData, StepDefinition, ValidationResult
from presolve.intake.validators.common import VALIDATORS


class ValidationEngine:
    """Registry-based validation engine.

    Only presence is checked for the built-in wizard; extra validators can be
    registered and referenced by name from the wizard definition.
    """

    def __init__(self) -> None:
        self._validators: dict[str, Callable[..., str | None]] = dict(VALIDATORS)

    def register(self, name: str, fn: Callable[..., str | None]) -> None:
        self._validators[name] = fn

    def validate_field(
        self, field: FieldDefinition, value: Any, params: dict[str, Any] | None = None
    ) -> list[str]:
        """Validate a single field value. Returns list of error messages."""
        errors: list[str] = []
        params = params or {}

        if field.required:
            fn = self._validators.get("required")
            if fn:
                err = fn(value)
                if err:
                    errors.append(err)
                    return errors

        for validator_name in field.validators:
            if validator_name == "required":
                continue
            fn = self._validators.get(validator_name)
            if fn is None:
                continue
            err = fn(value, **params)
            if err:
                errors.append(err)

        return errors

    def validate_step(self, step: StepDefinition, form: FormData) -> ValidationResult:
        """Validate all fields of a step against the current form data."""
        all_errors: dict[str, list[str]] = {}

        for field in step.fields:
            field_errors = self.validate_field(field, form.value_of(field.id))
            if field_errors:
                all_errors[field.id] = field_errors

        return ValidationResult(
            valid=len(all_errors) == 0,
            errors=all_errors,
        )
