from __future__ import annotations

from dataclasses import asdict, fields, replace
from datetime import date, datetime
from typing import Any

from app.domain.entities.contact_submission import ContactSubmission
from app.domain.entities.course import Course, CourseSession
from app.domain.entities.course_booking import CourseBooking
from app.domain.entities.quote_request import QuoteRequest
from app.domain.entities.submission_status import SubmissionKind

COURSES_TABLE = "training_courses"
SESSIONS_TABLE = "course_sessions"

SUBMISSION_TYPES: dict[SubmissionKind, type] = {
    SubmissionKind.quote: QuoteRequest,
    SubmissionKind.booking: CourseBooking,
    SubmissionKind.contact: ContactSubmission,
}

_DATE_FIELDS = {"event_date", "session_date"}
_DATETIME_FIELDS = {"created_at"}


def to_row(record: Any) -> dict[str, Any]:
    """Entity -> JSON-compatible dict with ISO dates."""
    row = asdict(record)
    for key, value in row.items():
        if isinstance(value, (date, datetime)):
            row[key] = value.isoformat()
    return row


def from_row(entity_type: type, row: dict[str, Any]) -> Any:
    """JSON dict -> entity. Unknown columns are ignored, missing optional ones default."""
    names = {f.name for f in fields(entity_type)}
    values: dict[str, Any] = {}
    for key, value in row.items():
        if key not in names:
            continue
        if value is not None and key in _DATETIME_FIELDS and isinstance(value, str):
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        elif value is not None and key in _DATE_FIELDS and isinstance(value, str):
            value = date.fromisoformat(value[:10])
        values[key] = value
    return entity_type(**values)


def course_from_row(row: dict[str, Any]) -> Course:
    return from_row(Course, row)


def session_from_row(row: dict[str, Any]) -> CourseSession:
    session = from_row(CourseSession, row)
    if isinstance(session.start_time, str) and len(session.start_time) > 5:
        # Postgres time columns come back as HH:MM:SS
        session = replace(session, start_time=session.start_time[:5])
    return session
