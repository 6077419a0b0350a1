import logging

from fastapi import APIRouter, Depends, HTTPException

from app.api.auth import require_admin
from app.api.v1.presenters import booking_record
from app.api.v1.schemas import (
    BookingListSchema,
    ContactListSchema,
    ContactRecordSchema,
    QuoteListSchema,
    QuoteRecordSchema,
    StatusUpdateSchema,
)
from app.application.exceptions import InvalidStatusError, RecordNotFoundError, StoreUnavailableError
from app.application.use_cases.list_submissions import ListSubmissionsUseCase
from app.application.use_cases.update_status import UpdateStatusUseCase
from app.domain.entities.submission_status import SubmissionKind, allowed_statuses
from app.wiring.dependencies import get_list_submissions_use_case, get_update_status_use_case

router = APIRouter(dependencies=[Depends(require_admin)])
logger = logging.getLogger(__name__)

KIND_SEGMENTS: dict[str, SubmissionKind] = {
    "quotes": SubmissionKind.quote,
    "bookings": SubmissionKind.booking,
    "contacts": SubmissionKind.contact,
}


@router.get("/quotes", response_model=QuoteListSchema)
def list_quotes(uc: ListSubmissionsUseCase = Depends(get_list_submissions_use_case)):
    listing = uc.for_admin(SubmissionKind.quote)
    return QuoteListSchema(
        records=[QuoteRecordSchema.model_validate(r) for r in listing.records],
        notice=listing.notice,
    )


@router.get("/bookings", response_model=BookingListSchema)
def list_bookings(uc: ListSubmissionsUseCase = Depends(get_list_submissions_use_case)):
    listing = uc.for_admin(SubmissionKind.booking)
    return BookingListSchema(records=[booking_record(b) for b in listing.bookings], notice=listing.notice)


@router.get("/contacts", response_model=ContactListSchema)
def list_contacts(uc: ListSubmissionsUseCase = Depends(get_list_submissions_use_case)):
    listing = uc.for_admin(SubmissionKind.contact)
    return ContactListSchema(
        records=[ContactRecordSchema.model_validate(r) for r in listing.records],
        notice=listing.notice,
    )


@router.get("/{kind}/statuses", response_model=list[str])
def list_statuses(kind: str):
    if kind not in KIND_SEGMENTS:
        raise HTTPException(status_code=404, detail=f"Unknown submission kind: {kind}")
    return allowed_statuses(KIND_SEGMENTS[kind])


@router.patch("/{kind}/{record_id}/status")
def update_status(
    kind: str,
    record_id: str,
    req: StatusUpdateSchema,
    uc: UpdateStatusUseCase = Depends(get_update_status_use_case),
) -> dict[str, str]:
    if kind not in KIND_SEGMENTS:
        raise HTTPException(status_code=404, detail=f"Unknown submission kind: {kind}")
    try:
        record = uc.execute(KIND_SEGMENTS[kind], record_id, req.status)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidStatusError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except StoreUnavailableError:
        logger.exception("Error updating status", extra={"kind": kind, "record_id": record_id})
        raise HTTPException(status_code=503, detail="Error updating status. Please try again.")
    return {"id": record.id, "status": record.status}
