from fastapi import APIRouter, Depends

from app.api.auth import require_user_id
from app.api.v1.presenters import booking_record
from app.api.v1.schemas import ContactRecordSchema, PortalResponseSchema, QuoteRecordSchema
from app.application.use_cases.list_submissions import ListSubmissionsUseCase
from app.domain.entities.submission_status import SubmissionKind
from app.wiring.dependencies import get_list_submissions_use_case

router = APIRouter()


@router.get("/submissions", response_model=PortalResponseSchema)
def my_submissions(
    user_id: str = Depends(require_user_id),
    uc: ListSubmissionsUseCase = Depends(get_list_submissions_use_case),
):
    listings = uc.for_user(user_id)
    notices = sorted({l.notice for l in listings.values() if l.notice})
    return PortalResponseSchema(
        quotes=[QuoteRecordSchema.model_validate(r) for r in listings[SubmissionKind.quote].records],
        bookings=[booking_record(b) for b in listings[SubmissionKind.booking].bookings],
        inquiries=[ContactRecordSchema.model_validate(r) for r in listings[SubmissionKind.contact].records],
        notices=notices,
    )
