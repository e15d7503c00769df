"""Loads the config-driven dispute filing wizard definition."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from presolve.intake.models import FieldDefinition, StepDefinition, WizardDefinition

DEFAULT_WIZARD_PATH = Path(__file__).with_name("wizard.yml")

FIRST_STEP = 1


def _parse_field(data: dict[str, Any]) -> FieldDefinition:
    return FieldDefinition(
        id=data["id"],
        label=data.get("label", data["id"]),
        required=data.get("required", False),
        validators=data.get("validators", []),
        options={str(k): str(v) for k, v in (data.get("options") or {}).items()},
        placeholder=data.get("placeholder", ""),
        help_text=data.get("help_text", ""),
    )


def _parse_step(data: dict[str, Any]) -> StepDefinition:
    fields = [_parse_field(f) for f in data.get("fields", [])]
    return StepDefinition(
        number=data["number"],
        id=data["id"],
        title=data.get("title", data["id"]),
        description=data.get("description", ""),
        fields=fields,
    )


def load_wizard(path: str | Path | None = None) -> WizardDefinition:
    """Load a wizard definition from YAML.

    Raises:
        ValueError: If step numbers are not consecutive starting at 1.
    """
    with open(Path(path) if path else DEFAULT_WIZARD_PATH) as fh:
        data = yaml.safe_load(fh)
    steps = sorted((_parse_step(s) for s in data.get("steps", [])), key=lambda s: s.number)
    numbers = [s.number for s in steps]
    if numbers != list(range(FIRST_STEP, FIRST_STEP + len(steps))):
        raise ValueError(f"Wizard steps must be numbered 1..n, got {numbers}")
    return WizardDefinition(
        id=data["id"],
        title=data.get("title", data["id"]),
        description=data.get("description", ""),
        steps=steps,
    )
