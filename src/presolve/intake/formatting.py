"""Pure derivations between canonical field values and their input widgets.

The claim amount is stored as bare digits and grouped only for display. The
deadline is stored as one string that packs an optional ISO date and an
optional free-text note.
"""

from __future__ import annotations

import re

DEADLINE_DELIMITER = " | "

_NON_DIGIT = re.compile(r"[^0-9]")
_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


# --- Currency ---


def digits_only(value: str) -> str:
    """Strip every non-digit character from user input."""
    return _NON_DIGIT.sub("", value or "")


def _group(digits: str, locale: str) -> str:
    # en-IN groups the last three digits, then pairs (lakh, crore).
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    size = 2 if locale.lower().replace("_", "-") == "en-in" else 3
    groups: list[str] = []
    while head:
        groups.insert(0, head[-size:])
        head = head[:-size]
    return ",".join(groups + [tail])


def format_amount(value: str, locale: str = "en-IN") -> str:
    """Render the digits of ``value`` with locale grouping separators.

    Returns ``""`` when ``value`` carries no digits. Formatting an already
    formatted string yields the same string.
    """
    digits = digits_only(value)
    if not digits:
        return ""
    return _group(str(int(digits)), locale)


def format_currency_input(keystrokes: str, locale: str = "en-IN") -> tuple[str, str]:
    """Split raw keystrokes into ``(raw_digits, display)``."""
    raw = digits_only(keystrokes)
    return raw, format_amount(raw, locale)


# --- Deadline ---


def is_iso_date(value: str) -> bool:
    return bool(_ISO_DATE.fullmatch(value or ""))


def deadline_date(details: str) -> str:
    """Date shown in the date picker: the first segment if it looks like a date."""
    first = (details or "").split(DEADLINE_DELIMITER)[0]
    return first if is_iso_date(first) else ""


def deadline_note(details: str) -> str:
    """Text shown in the note input: the second segment, or the whole string."""
    details = details or ""
    if DEADLINE_DELIMITER in details:
        return details.split(DEADLINE_DELIMITER)[1]
    return details


def with_deadline_date(details: str, date: str) -> str:
    """Return ``details`` with its date portion replaced by ``date``."""
    parts = (details or "").split(DEADLINE_DELIMITER)
    note = parts[1] if len(parts) > 1 else ""
    if not date:
        return note
    if note:
        return f"{date}{DEADLINE_DELIMITER}{note}"
    return date


def with_deadline_note(details: str, note: str) -> str:
    """Return ``details`` with its free-text portion replaced by ``note``.

    The existing date survives only if it matches ``YYYY-MM-DD``.
    """
    current = (details or "").split(DEADLINE_DELIMITER)[0]
    if is_iso_date(current):
        return f"{current}{DEADLINE_DELIMITER}{note}"
    return note
