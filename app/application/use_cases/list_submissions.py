from __future__ import annotations

import logging
from dataclasses import dataclass

from app.application.exceptions import StoreUnavailableError
from app.application.ports.course_catalog import CourseCatalogPort
from app.application.ports.submission_store import Submission, SubmissionStorePort
from app.domain.entities.course import Course, CourseSession
from app.domain.entities.course_booking import CourseBooking
from app.domain.entities.submission_status import SubmissionKind

LIST_UNAVAILABLE_MESSAGE = "Some records could not be loaded. Refresh to try again."


@dataclass(frozen=True)
class BookingListing:
    booking: CourseBooking
    session: CourseSession | None
    course: Course | None


@dataclass(frozen=True)
class SubmissionListing:
    kind: SubmissionKind
    records: list[Submission]
    bookings: list[BookingListing]  # filled for SubmissionKind.booking only
    notice: str | None = None


class ListSubmissionsUseCase:
    """Newest-first reads shared by the admin dashboard and the submitter's portal."""

    def __init__(self, store: SubmissionStorePort, catalog: CourseCatalogPort) -> None:
        self._store = store
        self._catalog = catalog
        self._logger = logging.getLogger(__name__)

    def for_admin(self, kind: SubmissionKind) -> SubmissionListing:
        return self._list(kind, user_id=None)

    def for_user(self, user_id: str) -> dict[SubmissionKind, SubmissionListing]:
        return {kind: self._list(kind, user_id=user_id) for kind in SubmissionKind}

    def _list(self, kind: SubmissionKind, user_id: str | None) -> SubmissionListing:
        try:
            records = self._store.list_submissions(kind, user_id=user_id)
        except StoreUnavailableError as e:
            self._logger.warning("Submission list unavailable", extra={"kind": kind.value, "reason": str(e)})
            return SubmissionListing(kind=kind, records=[], bookings=[], notice=LIST_UNAVAILABLE_MESSAGE)

        records = sorted(records, key=lambda r: r.created_at, reverse=True)
        if kind is not SubmissionKind.booking:
            return SubmissionListing(kind=kind, records=records, bookings=[])
        return SubmissionListing(kind=kind, records=records, bookings=self._enrich(records))

    def _enrich(self, bookings: list[CourseBooking]) -> list[BookingListing]:
        sessions: dict[str, CourseSession | None] = {}
        courses: dict[str, Course | None] = {}
        listings: list[BookingListing] = []
        for booking in bookings:
            if booking.session_id not in sessions:
                sessions[booking.session_id] = self._lookup(self._catalog.get_session, booking.session_id)
            session = sessions[booking.session_id]
            course = None
            if session is not None:
                if session.course_id not in courses:
                    courses[session.course_id] = self._lookup(self._catalog.get_course, session.course_id)
                course = courses[session.course_id]
            listings.append(BookingListing(booking=booking, session=session, course=course))
        return listings

    def _lookup(self, getter, key: str):
        try:
            return getter(key)
        except StoreUnavailableError as e:
            self._logger.warning("Catalog lookup failed", extra={"reason": str(e)})
            return None
