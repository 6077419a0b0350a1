from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import replace
from datetime import date

from app.application.exceptions import CapacityExceededError, InvalidStatusError, RecordNotFoundError
from app.application.ports.course_catalog import CourseCatalogPort
from app.application.ports.submission_store import Submission, SubmissionStorePort
from app.application.ports.workflow_store import WorkflowStorePort
from app.domain.entities.booking_workflow_state import BookingWorkflowState
from app.domain.entities.contact_submission import ContactSubmission
from app.domain.entities.course import Course, CourseSession
from app.domain.entities.course_booking import CourseBooking
from app.domain.entities.quote_request import QuoteRequest
from app.domain.entities.submission_status import SubmissionKind
from app.infrastructure.store.records import COURSES_TABLE, SESSIONS_TABLE


class MemoryRecordStore(CourseCatalogPort, SubmissionStorePort):
    """
    In-process tables for courses, sessions and the three submission kinds.

    Booking creation checks and takes session spots under one lock, so two
    concurrent bookings cannot both claim the last seats.
    """

    def __init__(
        self,
        courses: list[Course] | None = None,
        sessions: list[CourseSession] | None = None,
    ) -> None:
        self._courses: dict[str, Course] = {c.id: c for c in courses or []}
        self._sessions: dict[str, CourseSession] = {s.id: s for s in sessions or []}
        self._submissions: dict[SubmissionKind, dict[str, Submission]] = {kind: {} for kind in SubmissionKind}
        self._pending: set[str] = set()
        self._lock = threading.RLock()

    def _changed(self, table: str) -> None:
        self._pending.add(table)

    def _persist(self, tables: set[str]) -> None:
        """Hook for subclasses that save the tables a committed mutation touched."""

    @contextmanager
    def _transaction(self):
        """Hold the lock for a mutation and roll the tables back if it or its save fails."""
        with self._lock:
            snapshot = (
                dict(self._courses),
                dict(self._sessions),
                {kind: dict(rows) for kind, rows in self._submissions.items()},
            )
            self._pending = set()
            try:
                yield
                self._persist(self._pending)
            except Exception:
                self._courses, self._sessions, self._submissions = snapshot
                raise
            finally:
                self._pending = set()

    # catalog

    def add_course(self, course: Course) -> None:
        with self._transaction():
            self._courses[course.id] = course
            self._changed(COURSES_TABLE)

    def add_session(self, session: CourseSession) -> None:
        with self._transaction():
            self._sessions[session.id] = session
            self._changed(SESSIONS_TABLE)

    def list_active_courses(self) -> list[Course]:
        with self._lock:
            return sorted((c for c in self._courses.values() if c.is_active), key=lambda c: c.title)

    def find_open_sessions(self, course_id: str, today: date) -> list[CourseSession]:
        with self._lock:
            matches = [
                s
                for s in self._sessions.values()
                if s.course_id == course_id and s.session_date >= today and s.available_spots > 0
            ]
        return sorted(matches, key=lambda s: (s.session_date, s.start_time))

    def get_session(self, session_id: str) -> CourseSession | None:
        with self._lock:
            return self._sessions.get(session_id)

    def get_course(self, course_id: str) -> Course | None:
        with self._lock:
            return self._courses.get(course_id)

    def release_spots(self, session_id: str, count: int) -> None:
        with self._transaction():
            session = self._sessions.get(session_id)
            if session is None:
                raise RecordNotFoundError(f"No course session with id {session_id}")
            self._sessions[session_id] = replace(session, available_spots=session.available_spots + count)
            self._changed(SESSIONS_TABLE)

    # submissions

    def create_quote(self, quote: QuoteRequest) -> QuoteRequest:
        with self._transaction():
            self._submissions[SubmissionKind.quote][quote.id] = quote
            self._changed(SubmissionKind.quote.value)
        return quote

    def create_booking(self, booking: CourseBooking) -> CourseBooking:
        with self._transaction():
            session = self._sessions.get(booking.session_id)
            if session is None:
                raise RecordNotFoundError(f"No course session with id {booking.session_id}")
            if booking.participants > session.available_spots:
                raise CapacityExceededError(session.id, booking.participants, session.available_spots)
            self._sessions[session.id] = replace(
                session, available_spots=session.available_spots - booking.participants
            )
            self._submissions[SubmissionKind.booking][booking.id] = booking
            self._changed(SESSIONS_TABLE)
            self._changed(SubmissionKind.booking.value)
        return booking

    def create_contact(self, contact: ContactSubmission) -> ContactSubmission:
        with self._transaction():
            self._submissions[SubmissionKind.contact][contact.id] = contact
            self._changed(SubmissionKind.contact.value)
        return contact

    def get_submission(self, kind: SubmissionKind, record_id: str) -> Submission | None:
        with self._lock:
            return self._submissions[kind].get(record_id)

    def list_submissions(self, kind: SubmissionKind, user_id: str | None = None) -> list[Submission]:
        with self._lock:
            records = list(self._submissions[kind].values())
        if user_id is not None:
            records = [r for r in records if r.user_id == user_id]
        return sorted(records, key=lambda r: r.created_at, reverse=True)

    def update_status(
        self, kind: SubmissionKind, record_id: str, status: str, expected_status: str | None = None
    ) -> Submission:
        with self._transaction():
            record = self._submissions[kind].get(record_id)
            if record is None:
                raise RecordNotFoundError(f"No {kind.value} record with id {record_id}")
            if expected_status is not None and record.status != expected_status:
                raise InvalidStatusError(
                    f"{kind.value} {record_id} is now '{record.status}', not '{expected_status}'"
                )
            updated = replace(record, status=status)
            self._submissions[kind][record_id] = updated
            self._changed(kind.value)
        return updated


class MemoryWorkflowStore(WorkflowStorePort):
    def __init__(self, limit: int = 1000) -> None:
        self._states: dict[str, BookingWorkflowState] = {}
        self._limit = limit
        self._lock = threading.Lock()

    def get(self, workflow_id: str) -> BookingWorkflowState | None:
        with self._lock:
            return self._states.get(workflow_id)

    def put(self, state: BookingWorkflowState) -> None:
        with self._lock:
            self._states.pop(state.workflow_id, None)
            self._states[state.workflow_id] = state
            # Oldest abandoned workflows go first.
            while len(self._states) > self._limit:
                oldest = next(iter(self._states))
                del self._states[oldest]

    def discard(self, workflow_id: str) -> None:
        with self._lock:
            self._states.pop(workflow_id, None)

    def swap(self, expected: BookingWorkflowState, updated: BookingWorkflowState) -> bool:
        with self._lock:
            if self._states.get(expected.workflow_id) is not expected:
                return False
            self._states[expected.workflow_id] = updated
            return True
