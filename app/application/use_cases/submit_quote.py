from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable

from app.application.dto.forms import QuoteForm
from app.application.exceptions import SubmissionValidationError
from app.application.ports.submission_store import SubmissionStorePort
from app.application.utils.form_rules import check_contact_fields, clean_text, positive_or_none
from app.application.utils.pricing import ServiceLevel, estimate
from app.domain.entities.quote_request import QuoteRequest
from app.domain.entities.submission_status import INITIAL_STATUS, SubmissionKind


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SubmitQuoteUseCase:
    def __init__(
        self,
        store: SubmissionStorePort,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    def execute(self, form: QuoteForm, user_id: str | None = None) -> QuoteRequest:
        """
        Validate the quote form, snapshot the estimate and persist the request.

        The estimate is computed here once and stored; later pricing changes
        never touch a stored quote.
        """
        errors = check_contact_fields(form.name, form.email)
        if not clean_text(form.event_type):
            errors["event_type"] = "Event type is required"
        service_level = clean_text(form.service_level)
        if service_level and service_level not in {level.value for level in ServiceLevel}:
            errors["service_level"] = "Unknown service level"
        if errors:
            raise SubmissionValidationError(errors)

        attendees = positive_or_none(form.expected_attendees)
        hours = positive_or_none(form.event_duration_hours)

        quote = QuoteRequest(
            id=str(uuid.uuid4()),
            name=clean_text(form.name) or "",
            email=clean_text(form.email) or "",
            event_type=clean_text(form.event_type) or "",
            created_at=self._clock(),
            status=INITIAL_STATUS[SubmissionKind.quote],
            phone=clean_text(form.phone),
            company=clean_text(form.company),
            event_date=form.event_date,
            event_duration_hours=hours,
            expected_attendees=attendees,
            location=clean_text(form.location),
            service_level=service_level,
            additional_requirements=clean_text(form.additional_requirements),
            estimated_quote=estimate(attendees, hours, service_level),
            user_id=user_id,
        )

        saved = self._store.create_quote(quote)
        self._logger.info(
            "Quote request stored",
            extra={"kind": SubmissionKind.quote.value, "record_id": saved.id},
        )
        return saved
