from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CourseBooking:
    id: str
    session_id: str
    name: str
    email: str
    participants: int
    created_at: datetime
    status: str = "pending"
    phone: str | None = None
    company: str | None = None
    user_id: str | None = None
