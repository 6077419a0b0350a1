import logging

from fastapi import APIRouter, Depends, HTTPException

from app.api.auth import current_user_id
from app.api.v1.schemas import (
    EstimateRequestSchema,
    EstimateResponseSchema,
    QuoteOptionsSchema,
    QuoteRecordSchema,
    QuoteRequestSchema,
    ServiceLevelOptionSchema,
)
from app.application.dto.forms import QuoteForm
from app.application.exceptions import StoreUnavailableError, SubmissionValidationError
from app.application.use_cases.submit_quote import SubmitQuoteUseCase
from app.application.utils.pricing import (
    EVENT_TYPES,
    SERVICE_LEVEL_LABELS,
    SERVICE_LEVEL_MULTIPLIERS,
    estimate,
)
from app.core.config import settings
from app.wiring.dependencies import get_submit_quote_use_case

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/options", response_model=QuoteOptionsSchema)
def quote_options():
    return QuoteOptionsSchema(
        event_types=list(EVENT_TYPES),
        service_levels=[
            ServiceLevelOptionSchema(value=level, label=label, multiplier=float(SERVICE_LEVEL_MULTIPLIERS[level]))
            for level, label in SERVICE_LEVEL_LABELS.items()
        ],
        currency_symbol=settings.CURRENCY_SYMBOL,
    )


@router.post("/estimate", response_model=EstimateResponseSchema)
def quote_estimate(req: EstimateRequestSchema):
    amount = estimate(req.expected_attendees, req.event_duration_hours, req.service_level)
    return EstimateResponseSchema(estimated_quote=amount, currency_symbol=settings.CURRENCY_SYMBOL)


@router.post("", response_model=QuoteRecordSchema, status_code=201)
def submit_quote(
    req: QuoteRequestSchema,
    user_id: str | None = Depends(current_user_id),
    uc: SubmitQuoteUseCase = Depends(get_submit_quote_use_case),
):
    try:
        quote = uc.execute(QuoteForm(**req.model_dump()), user_id=user_id)
    except SubmissionValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors)
    except StoreUnavailableError:
        logger.exception("Error submitting quote")
        raise HTTPException(
            status_code=503,
            detail="Failed to submit quote request. Please try again.",
        )
    return QuoteRecordSchema.model_validate(quote)
