from fastapi import APIRouter, Depends, HTTPException, Response

from app.api.auth import current_user_id
from app.api.v1.presenters import workflow_response
from app.api.v1.schemas import (
    ParticipantDetailsSchema,
    SelectCourseSchema,
    SelectSessionSchema,
    WorkflowResponseSchema,
)
from app.application.dto.forms import ParticipantDetails
from app.application.exceptions import RecordNotFoundError, SubmissionValidationError, WorkflowStateError
from app.application.use_cases.booking import BookingWorkflowUseCase
from app.wiring.dependencies import get_booking_workflow_use_case

router = APIRouter()


@router.post("/workflows", response_model=WorkflowResponseSchema, status_code=201)
def start_workflow(
    user_id: str | None = Depends(current_user_id),
    uc: BookingWorkflowUseCase = Depends(get_booking_workflow_use_case),
):
    result = uc.start(user_id=user_id)
    return workflow_response(result.updated_state, result)


@router.get("/workflows/{workflow_id}", response_model=WorkflowResponseSchema)
def get_workflow(
    workflow_id: str,
    uc: BookingWorkflowUseCase = Depends(get_booking_workflow_use_case),
):
    try:
        state = uc.get_state(workflow_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return workflow_response(state)


@router.delete("/workflows/{workflow_id}", status_code=204)
def abandon_workflow(
    workflow_id: str,
    uc: BookingWorkflowUseCase = Depends(get_booking_workflow_use_case),
):
    uc.abandon(workflow_id)
    return Response(status_code=204)


@router.post("/workflows/{workflow_id}/course", response_model=WorkflowResponseSchema)
def select_course(
    workflow_id: str,
    req: SelectCourseSchema,
    uc: BookingWorkflowUseCase = Depends(get_booking_workflow_use_case),
):
    try:
        result = uc.select_course(workflow_id, req.course_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except WorkflowStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return workflow_response(result.updated_state, result)


@router.post("/workflows/{workflow_id}/session", response_model=WorkflowResponseSchema)
def select_session(
    workflow_id: str,
    req: SelectSessionSchema,
    uc: BookingWorkflowUseCase = Depends(get_booking_workflow_use_case),
):
    try:
        result = uc.select_session(workflow_id, req.session_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except WorkflowStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return workflow_response(result.updated_state, result)


@router.post("/workflows/{workflow_id}/submit", response_model=WorkflowResponseSchema)
def submit_booking(
    workflow_id: str,
    req: ParticipantDetailsSchema,
    uc: BookingWorkflowUseCase = Depends(get_booking_workflow_use_case),
):
    try:
        result = uc.submit(workflow_id, ParticipantDetails(**req.model_dump()))
    except SubmissionValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except WorkflowStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return workflow_response(result.updated_state, result)
