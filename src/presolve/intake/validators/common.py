"""Built-in field validators."""

from __future__ import annotations

from typing import Any

# Registry of validator functions: name -> callable(value, **params) -> str | None
# Returns an error message string on failure, None on success.
VALIDATORS: dict[str, Any] = {}

REQUIRED_MESSAGE = "This field is required"


def register(name: str):
    """Decorator to register a validator function."""
    def decorator(fn):
        VALIDATORS[name] = fn
        return fn
    return decorator


@register("required")
def validate_required(value: Any, **_kwargs: Any) -> str | None:
    if value is None or value == "":
        return REQUIRED_MESSAGE
    return None
