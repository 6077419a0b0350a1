from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Course:
    id: str
    title: str
    description: str | None = None
    duration: str | None = None  # display label, e.g. "1 day" or "3 days"
    price: float | None = None  # per participant
    category: str | None = None
    is_active: bool = True


@dataclass(frozen=True)
class CourseSession:
    id: str
    course_id: str
    session_date: date
    start_time: str  # HH:MM
    location: str | None = None
    available_spots: int = 0

    def is_offerable(self, today: date) -> bool:
        return self.available_spots > 0 and self.session_date >= today
