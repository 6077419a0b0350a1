from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class QuoteForm:
    name: str
    email: str
    event_type: str
    phone: str | None = None
    company: str | None = None
    event_date: date | None = None
    event_duration_hours: int | None = None
    expected_attendees: int | None = None
    location: str | None = None
    service_level: str | None = None
    additional_requirements: str | None = None


@dataclass(frozen=True)
class ParticipantDetails:
    name: str
    email: str
    participants: int = 1
    phone: str | None = None
    company: str | None = None


@dataclass(frozen=True)
class ContactForm:
    name: str
    email: str
    phone: str | None = None
    event_type: str | None = None
    event_date: date | None = None
    attendees: int | None = None
    message: str | None = None
