from __future__ import annotations

import logging

from app.application.exceptions import InvalidStatusError, RecordNotFoundError, StoreUnavailableError
from app.application.ports.course_catalog import CourseCatalogPort
from app.application.ports.submission_store import Submission, SubmissionStorePort
from app.domain.entities.course_booking import CourseBooking
from app.domain.entities.submission_status import (
    BookingStatus,
    SubmissionKind,
    allowed_statuses,
    is_allowed_transition,
    is_known_status,
)


class UpdateStatusUseCase:
    """
    Admin-driven status changes for quotes, bookings and contact submissions.

    By default any known status of the kind may be set from any other. With
    `strict_transitions` the per-kind edge table is enforced instead.
    """

    def __init__(
        self,
        store: SubmissionStorePort,
        catalog: CourseCatalogPort | None = None,
        strict_transitions: bool = False,
        release_spots_on_cancel: bool = False,
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._strict = strict_transitions
        self._release_spots_on_cancel = release_spots_on_cancel
        self._logger = logging.getLogger(__name__)

    def execute(self, kind: SubmissionKind, record_id: str, status: str) -> Submission:
        target = status.strip().lower()
        if not is_known_status(kind, target):
            raise InvalidStatusError(
                f"Unknown status '{status}' for {kind.value}; expected one of {', '.join(allowed_statuses(kind))}"
            )

        current = self._store.get_submission(kind, record_id)
        if current is None:
            raise RecordNotFoundError(f"No {kind.value} record with id {record_id}")

        if self._strict and not is_allowed_transition(kind, current.status, target):
            raise InvalidStatusError(f"Cannot move {kind.value} from '{current.status}' to '{target}'")

        # In strict mode the store re-checks the status it was validated against.
        expected = current.status if self._strict else None
        updated = self._store.update_status(kind, record_id, target, expected_status=expected)
        self._logger.info(
            "Submission status updated",
            extra={"kind": kind.value, "record_id": record_id, "status": target},
        )

        if self._should_release(kind, current, target):
            self._release_spots(current)
        return updated

    def _should_release(self, kind: SubmissionKind, current: Submission, target: str) -> bool:
        return (
            self._release_spots_on_cancel
            and self._catalog is not None
            and kind is SubmissionKind.booking
            and target == BookingStatus.cancelled.value
            and current.status != BookingStatus.cancelled.value
        )

    def _release_spots(self, booking: CourseBooking) -> None:
        try:
            self._catalog.release_spots(booking.session_id, booking.participants)
        except (StoreUnavailableError, RecordNotFoundError) as e:
            # The status change already happened; the spot count has to be fixed by hand.
            self._logger.error(
                "Could not release spots for cancelled booking",
                extra={"record_id": booking.id, "session_id": booking.session_id, "reason": str(e)},
            )
