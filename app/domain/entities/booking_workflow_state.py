from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from app.domain.entities.course import Course, CourseSession


@dataclass(frozen=True)
class BookingConfirmation:
    booking_id: str
    course_title: str
    session_date: date
    start_time: str
    location: str | None
    participants: int
    total_price: float | None  # None when the course has no listed price
    email: str


@dataclass(frozen=True)
class BookingWorkflowState:
    workflow_id: str
    status: str = "none_selected"  # "none_selected", "course_selected", "session_selected", "submitting", "submitted"
    user_id: str | None = None
    courses: tuple[Course, ...] = ()  # fetched once when the workflow starts
    course_id: str | None = None
    sessions: tuple[CourseSession, ...] = ()  # open sessions for course_id
    session_id: str | None = None
    confirmation: BookingConfirmation | None = None

    @property
    def selected_course(self) -> Course | None:
        return next((c for c in self.courses if c.id == self.course_id), None)

    @property
    def selected_session(self) -> CourseSession | None:
        return next((s for s in self.sessions if s.id == self.session_id), None)
