"""Tests for the wizard definition loader and validation engine."""

from __future__ import annotations

import pytest
import yaml

from presolve.intake.engine import load_wizard
from presolve.intake.models import FieldDefinition, FormData
from presolve.intake.validation import ValidationEngine


@pytest.fixture
def wizard():
    return load_wizard()


@pytest.fixture
def validation_engine():
    return ValidationEngine()


class TestWizardDefinition:
    def test_three_steps_in_order(self, wizard):
        assert [s.title for s in wizard.steps] == [
            "Service Selection",
            "Entity Verification",
            "Case Disclosures",
        ]

    def test_required_fields_per_step(self, wizard):
        assert wizard.step(1).required_fields == ["stakeholder_type", "service_track"]
        assert wizard.step(2).required_fields == ["petitioner_name", "respondent_name"]
        assert wizard.step(3).required_fields == ["claim_amount", "urgency", "description"]

    def test_deadline_is_optional(self, wizard):
        deadline = next(f for f in wizard.step(3).fields if f.id == "deadline_details")
        assert deadline.required is False

    def test_urgency_option_labels(self, wizard):
        urgency = next(f for f in wizard.step(3).fields if f.id == "urgency")
        assert urgency.options["Low"] == "Standard (30 days)"
        assert urgency.options["Immediate Action Required"] == "Immediate Action"

    def test_unknown_step_raises(self, wizard):
        with pytest.raises(KeyError):
            wizard.step(4)

    def test_every_field_exists_on_form(self, wizard):
        for step in wizard.steps:
            for field in step.fields:
                assert field.id in FormData.model_fields

    def test_rejects_gapped_step_numbers(self, tmp_path):
        path = tmp_path / "wizard.yml"
        with open(path, "w") as fh:
            yaml.dump(
                {"id": "broken", "steps": [{"number": 1, "id": "a"}, {"number": 3, "id": "b"}]},
                fh,
            )
        with pytest.raises(ValueError, match="numbered"):
            load_wizard(path)


class TestValidationEngine:
    def test_required_field(self, validation_engine):
        field = FieldDefinition(id="petitioner_name", label="Petitioner", required=True)
        assert validation_engine.validate_field(field, "") == ["This field is required"]
        assert validation_engine.validate_field(field, None) == ["This field is required"]
        assert validation_engine.validate_field(field, "Asha") == []

    def test_whitespace_counts_as_present(self, validation_engine):
        field = FieldDefinition(id="description", label="Description", required=True)
        assert validation_engine.validate_field(field, " ") == []

    def test_optional_field_passes_empty(self, validation_engine):
        field = FieldDefinition(id="deadline_details", label="Deadline")
        assert validation_engine.validate_field(field, "") == []

    def test_registered_validator_runs(self, validation_engine):
        validation_engine.register("short", lambda v, **_: "Too long" if len(v) > 3 else None)
        field = FieldDefinition(id="description", label="Description", validators=["short"])
        assert validation_engine.validate_field(field, "abcdef") == ["Too long"]

    def test_step_one(self, validation_engine, wizard):
        form = FormData(service_track="Mediation")
        result = validation_engine.validate_step(wizard.step(1), form)
        assert result.valid is False
        assert list(result.errors) == ["stakeholder_type"]

        form.stakeholder_type = "Individual"
        assert validation_engine.validate_step(wizard.step(1), form).valid is True
