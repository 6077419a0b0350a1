from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime, timezone
from typing import Callable
from zoneinfo import ZoneInfo

from app.application.dto.forms import ParticipantDetails
from app.application.exceptions import (
    CapacityExceededError,
    RecordNotFoundError,
    StoreUnavailableError,
    SubmissionValidationError,
    WorkflowStateError,
)
from app.application.ports.course_catalog import CourseCatalogPort
from app.application.ports.submission_store import SubmissionStorePort
from app.application.ports.workflow_store import WorkflowStorePort
from app.application.utils.form_rules import check_contact_fields, check_participants, clean_text
from app.domain.entities.booking_workflow_state import BookingConfirmation, BookingWorkflowState
from app.domain.entities.course import CourseSession
from app.domain.entities.course_booking import CourseBooking
from app.domain.entities.submission_status import INITIAL_STATUS, SubmissionKind

CONTACT_US_MESSAGE = "No upcoming dates are available for this course. Please contact us to arrange a date."
RETRY_MESSAGE = "We couldn't submit your booking. Please try again."
SESSION_FULL_MESSAGE = "This session no longer has enough spots. Please choose fewer participants or another date."
COURSES_UNAVAILABLE_MESSAGE = "Courses could not be loaded right now. Please try again shortly."
SESSIONS_UNAVAILABLE_MESSAGE = "Dates could not be loaded right now. Please try again shortly."


@dataclass(frozen=True)
class BookingResult:
    action: str  # "choose_course", "choose_session", "contact_us", "enter_details", "booked", "retry", "session_full", "unavailable"
    message: str | None
    updated_state: BookingWorkflowState


class BookingWorkflowUseCase:
    """
    Course booking wizard: course -> session -> participant details -> submit.

    Each step loads the workflow by id, computes the next state and saves it.
    Nothing reaches the submission store until submit.
    """

    def __init__(
        self,
        catalog: CourseCatalogPort,
        store: SubmissionStorePort,
        workflows: WorkflowStorePort,
        timezone: ZoneInfo,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._catalog = catalog
        self._store = store
        self._workflows = workflows
        self._timezone = timezone
        self._clock = clock or (lambda: datetime.now(self._timezone))
        self._logger = logging.getLogger(__name__)

    def start(self, user_id: str | None = None) -> BookingResult:
        workflow_id = str(uuid.uuid4())
        try:
            courses = tuple(self._catalog.list_active_courses())
        except StoreUnavailableError as e:
            self._logger.warning("Course list unavailable", extra={"workflow_id": workflow_id, "reason": str(e)})
            state = BookingWorkflowState(workflow_id=workflow_id, user_id=user_id)
            self._workflows.put(state)
            return BookingResult(action="unavailable", message=COURSES_UNAVAILABLE_MESSAGE, updated_state=state)

        state = BookingWorkflowState(workflow_id=workflow_id, user_id=user_id, courses=courses)
        self._workflows.put(state)
        return BookingResult(action="choose_course", message=None, updated_state=state)

    def abandon(self, workflow_id: str) -> None:
        """Drop an in-progress workflow. Nothing was persisted for it."""
        self._workflows.discard(workflow_id)
        self._logger.info("Booking workflow abandoned", extra={"workflow_id": workflow_id})

    def get_state(self, workflow_id: str) -> BookingWorkflowState:
        state = self._workflows.get(workflow_id)
        if state is None:
            raise RecordNotFoundError(f"Unknown booking workflow: {workflow_id}")
        return state

    def select_course(self, workflow_id: str, course_id: str) -> BookingResult:
        state = self.get_state(workflow_id)
        result = self._select_course(state, course_id)
        self._workflows.put(result.updated_state)
        return result

    def select_session(self, workflow_id: str, session_id: str) -> BookingResult:
        state = self.get_state(workflow_id)
        result = self._select_session(state, session_id)
        self._workflows.put(result.updated_state)
        return result

    def submit(self, workflow_id: str, details: ParticipantDetails) -> BookingResult:
        state = self.get_state(workflow_id)
        self._ensure_open(state)
        # Only one submit per workflow may reach the store.
        if not self._workflows.swap(state, replace(state, status="submitting")):
            raise WorkflowStateError("Booking is already being submitted")

        try:
            result = self._submit(state, details)
        except Exception:
            self._workflows.put(state)
            raise
        self._workflows.put(result.updated_state)
        return result

    def _today(self) -> date:
        return self._clock().astimezone(self._timezone).date()

    def _ensure_open(self, state: BookingWorkflowState) -> None:
        if state.status == "submitted":
            raise WorkflowStateError("Booking already submitted")
        if state.status == "submitting":
            raise WorkflowStateError("Booking is already being submitted")

    def _select_course(self, state: BookingWorkflowState, course_id: str) -> BookingResult:
        self._ensure_open(state)
        if not any(course.id == course_id for course in state.courses):
            raise RecordNotFoundError(f"Course {course_id} is not offered")

        # A new course choice always drops the session picked for the previous one.
        reset = replace(state, status="course_selected", course_id=course_id, sessions=(), session_id=None)

        try:
            sessions = self._open_sessions(course_id)
        except StoreUnavailableError as e:
            self._logger.warning(
                "Session list unavailable",
                extra={"workflow_id": state.workflow_id, "course_id": course_id, "reason": str(e)},
            )
            return BookingResult(action="unavailable", message=SESSIONS_UNAVAILABLE_MESSAGE, updated_state=reset)

        updated = replace(reset, sessions=sessions)
        if not sessions:
            return BookingResult(action="contact_us", message=CONTACT_US_MESSAGE, updated_state=updated)
        return BookingResult(action="choose_session", message=None, updated_state=updated)

    def _select_session(self, state: BookingWorkflowState, session_id: str) -> BookingResult:
        self._ensure_open(state)
        if state.status not in ("course_selected", "session_selected"):
            raise WorkflowStateError("Select a course before choosing a date")
        if not any(session.id == session_id for session in state.sessions):
            raise RecordNotFoundError(f"Session {session_id} is not available for this course")

        updated = replace(state, status="session_selected", session_id=session_id)
        return BookingResult(action="enter_details", message=None, updated_state=updated)

    def _submit(self, state: BookingWorkflowState, details: ParticipantDetails) -> BookingResult:
        self._ensure_open(state)
        session = state.selected_session
        course = state.selected_course
        if state.status != "session_selected" or session is None or course is None:
            raise WorkflowStateError("Select a date before entering participant details")

        errors = check_contact_fields(details.name, details.email)
        participants_error = check_participants(details.participants, session.available_spots)
        if participants_error:
            errors["participants"] = participants_error
        if errors:
            raise SubmissionValidationError(errors)

        booking = CourseBooking(
            id=str(uuid.uuid4()),
            session_id=session.id,
            name=clean_text(details.name) or "",
            email=clean_text(details.email) or "",
            participants=details.participants,
            created_at=self._clock().astimezone(timezone.utc),
            status=INITIAL_STATUS[SubmissionKind.booking],
            phone=clean_text(details.phone),
            company=clean_text(details.company),
            user_id=state.user_id,
        )

        try:
            saved = self._store.create_booking(booking)
        except CapacityExceededError as e:
            self._logger.info(
                "Booking refused for capacity",
                extra={"workflow_id": state.workflow_id, "session_id": session.id, "reason": str(e)},
            )
            return self._after_capacity_refusal(state)
        except StoreUnavailableError as e:
            self._logger.error(
                "Error creating booking",
                extra={"workflow_id": state.workflow_id, "session_id": session.id, "reason": str(e)},
            )
            return BookingResult(action="retry", message=RETRY_MESSAGE, updated_state=state)

        total = round(course.price * saved.participants, 2) if course.price is not None else None
        confirmation = BookingConfirmation(
            booking_id=saved.id,
            course_title=course.title,
            session_date=session.session_date,
            start_time=session.start_time,
            location=session.location,
            participants=saved.participants,
            total_price=total,
            email=saved.email,
        )
        self._logger.info(
            "Course booking stored",
            extra={"workflow_id": state.workflow_id, "kind": SubmissionKind.booking.value, "record_id": saved.id},
        )
        return BookingResult(
            action="booked",
            message=None,
            updated_state=replace(state, status="submitted", confirmation=confirmation),
        )

    def _after_capacity_refusal(self, state: BookingWorkflowState) -> BookingResult:
        """Refresh the session list so the next attempt is checked against current spots."""
        try:
            sessions = self._open_sessions(state.course_id or "")
        except StoreUnavailableError:
            return BookingResult(action="session_full", message=SESSION_FULL_MESSAGE, updated_state=state)

        if any(session.id == state.session_id for session in sessions):
            return BookingResult(
                action="session_full",
                message=SESSION_FULL_MESSAGE,
                updated_state=replace(state, sessions=sessions),
            )
        return BookingResult(
            action="session_full",
            message=SESSION_FULL_MESSAGE,
            updated_state=replace(state, status="course_selected", sessions=sessions, session_id=None),
        )

    def _open_sessions(self, course_id: str) -> tuple[CourseSession, ...]:
        today = self._today()
        sessions = self._catalog.find_open_sessions(course_id, today)
        # Guard against adapters that return rows outside the filter.
        offerable = [s for s in sessions if s.course_id == course_id and s.is_offerable(today)]
        return tuple(sorted(offerable, key=lambda s: (s.session_date, s.start_time)))
