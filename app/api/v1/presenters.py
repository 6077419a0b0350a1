from __future__ import annotations

from dataclasses import asdict

from app.api.v1.schemas import (
    BookingConfirmationSchema,
    BookingRecordSchema,
    CourseSchema,
    CourseSessionSchema,
    WorkflowResponseSchema,
)
from app.application.use_cases.booking import BookingResult
from app.application.use_cases.list_submissions import BookingListing
from app.domain.entities.booking_workflow_state import BookingWorkflowState


def workflow_response(state: BookingWorkflowState, result: BookingResult | None = None) -> WorkflowResponseSchema:
    session = state.selected_session
    return WorkflowResponseSchema(
        workflow_id=state.workflow_id,
        status=state.status,
        action=result.action if result else None,
        message=result.message if result else None,
        courses=[CourseSchema.model_validate(c) for c in state.courses],
        selected_course_id=state.course_id,
        sessions=[CourseSessionSchema.model_validate(s) for s in state.sessions],
        selected_session_id=state.session_id,
        max_participants=session.available_spots if session and state.status == "session_selected" else None,
        confirmation=(
            BookingConfirmationSchema.model_validate(state.confirmation) if state.confirmation else None
        ),
    )


def booking_record(listing: BookingListing) -> BookingRecordSchema:
    session = listing.session
    return BookingRecordSchema(
        **asdict(listing.booking),
        course_title=listing.course.title if listing.course else None,
        session_date=session.session_date if session else None,
        start_time=session.start_time if session else None,
        location=session.location if session else None,
    )
