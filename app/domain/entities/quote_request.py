from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class QuoteRequest:
    id: str
    name: str
    email: str
    event_type: str
    created_at: datetime
    status: str = "new"
    phone: str | None = None
    company: str | None = None
    event_date: date | None = None
    event_duration_hours: int | None = None
    expected_attendees: int | None = None
    location: str | None = None
    service_level: str | None = None
    additional_requirements: str | None = None
    estimated_quote: int | None = None  # snapshot taken at submission
    user_id: str | None = None
