import logging

from fastapi import APIRouter, Depends, HTTPException

from app.api.auth import current_user_id
from app.api.v1.schemas import ContactRecordSchema, ContactRequestSchema
from app.application.dto.forms import ContactForm
from app.application.exceptions import StoreUnavailableError, SubmissionValidationError
from app.application.use_cases.submit_contact import SubmitContactUseCase
from app.wiring.dependencies import get_submit_contact_use_case

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=ContactRecordSchema, status_code=201)
def submit_contact(
    req: ContactRequestSchema,
    user_id: str | None = Depends(current_user_id),
    uc: SubmitContactUseCase = Depends(get_submit_contact_use_case),
):
    try:
        contact = uc.execute(ContactForm(**req.model_dump()), user_id=user_id)
    except SubmissionValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors)
    except StoreUnavailableError:
        logger.exception("Error submitting contact form")
        raise HTTPException(
            status_code=503,
            detail="There was an issue submitting your request. Please try again.",
        )
    return ContactRecordSchema.model_validate(contact)
