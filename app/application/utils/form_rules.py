from __future__ import annotations

import re

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def clean_text(value: str | None) -> str | None:
    """Strip whitespace; blank strings become None."""
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def positive_or_none(value: int | None) -> int | None:
    if value is None or value <= 0:
        return None
    return value


def check_contact_fields(name: str | None, email: str | None) -> dict[str, str]:
    """Required-field errors for the name/email pair shared by every public form."""
    errors: dict[str, str] = {}
    if not clean_text(name):
        errors["name"] = "Name is required"
    cleaned_email = clean_text(email)
    if not cleaned_email:
        errors["email"] = "Email is required"
    elif not EMAIL_PATTERN.match(cleaned_email):
        errors["email"] = "Email address is not valid"
    return errors


def check_participants(participants: int | None, available_spots: int) -> str | None:
    if participants is None or participants < 1:
        return "At least one participant is required"
    if participants > available_spots:
        return f"Only {available_spots} spots are available for this session"
    return None
