from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class ContactSubmission:
    id: str
    name: str
    email: str
    created_at: datetime
    status: str = "new"
    phone: str | None = None
    event_type: str | None = None
    event_date: date | None = None
    attendees: int | None = None
    message: str | None = None
    user_id: str | None = None
