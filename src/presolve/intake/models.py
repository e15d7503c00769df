"""Shared models for the dispute intake wizard."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from presolve.core.types import ServiceTrack, StakeholderType, UrgencyLevel


class FieldDefinition(BaseModel):
    """Definition of a single form field within a wizard step."""

    id: str
    label: str
    required: bool = False
    validators: list[str] = Field(default_factory=list)
    options: dict[str, str] = Field(default_factory=dict)
    placeholder: str = ""
    help_text: str = ""


class StepDefinition(BaseModel):
    """Definition of a single wizard step."""

    number: int
    id: str
    title: str
    description: str = ""
    fields: list[FieldDefinition] = Field(default_factory=list)

    @property
    def required_fields(self) -> list[str]:
        return [f.id for f in self.fields if f.required]


class WizardDefinition(BaseModel):
    """Full definition of the intake wizard loaded from YAML."""

    id: str
    title: str
    description: str = ""
    steps: list[StepDefinition] = Field(default_factory=list)

    def step(self, number: int) -> StepDefinition:
        for step in self.steps:
            if step.number == number:
                return step
        raise KeyError(f"Unknown step: {number!r}")


class ValidationResult(BaseModel):
    """Result of validating a step."""

    valid: bool
    errors: dict[str, list[str]] = Field(default_factory=dict)


class FormData(BaseModel):
    """Case details collected across the three wizard steps.

    One instance per filing session. Unset choice fields are ``None``; assigning
    an empty string to one of them unsets it.
    """

    model_config = ConfigDict(validate_assignment=True)

    stakeholder_type: StakeholderType | None = None
    service_track: ServiceTrack | None = None
    petitioner_name: str = ""
    respondent_name: str = ""
    claim_amount: str = ""
    description: str = ""
    urgency: UrgencyLevel | None = None
    deadline_details: str = ""

    @field_validator("stakeholder_type", "service_track", "urgency", mode="before")
    @classmethod
    def _empty_choice_is_unset(cls, value: Any) -> Any:
        if value == "":
            return None
        return value

    def value_of(self, field: str) -> str:
        """Return a field's value as text, ``""`` when unset."""
        if field not in type(self).model_fields:
            raise KeyError(f"Unknown field: {field!r}")
        value = getattr(self, field)
        return "" if value is None else str(value)


class SheetPayload(BaseModel):
    """JSON body posted to the case submission webhook."""

    model_config = ConfigDict(populate_by_name=True)

    petitioner_name: str = Field(alias="petitionerName")
    respondent_name: str = Field(alias="respondentName")
    claim_value: str = Field(alias="claimValue")
    description: str
    urgency_level: str = Field(alias="urgencyLevel")
    stakeholder_type: str = Field(alias="stakeholderType")
    requested_service: str = Field(alias="requestedService")
    deadline_details: str = Field(alias="deadlineDetails")
    smart_summary: str = Field(alias="smartSummary")

    @classmethod
    def from_form(cls, form: FormData, smart_summary: str) -> SheetPayload:
        return cls(
            petitioner_name=form.petitioner_name,
            respondent_name=form.respondent_name,
            claim_value=form.claim_amount,
            description=form.description,
            urgency_level=form.value_of("urgency"),
            stakeholder_type=form.value_of("stakeholder_type"),
            requested_service=form.value_of("service_track"),
            deadline_details=form.deadline_details,
            smart_summary=smart_summary,
        )

    def to_wire(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)


class FilingSnapshot(BaseModel):
    """Serializable view of one filing session."""

    session_id: str
    step: int
    total_steps: int
    form: FormData
    touched: list[str] = Field(default_factory=list)
    step_valid: dict[int, bool] = Field(default_factory=dict)
    errors: dict[str, str] = Field(default_factory=dict)
    claim_display: str = ""
    deadline_date: str = ""
    deadline_note: str = ""
    submitting: bool = False
    success: bool = False
    support_visible: bool = False
    error: str | None = None
