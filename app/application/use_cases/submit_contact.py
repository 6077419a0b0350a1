from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable

from app.application.dto.forms import ContactForm
from app.application.exceptions import SubmissionValidationError
from app.application.ports.submission_store import SubmissionStorePort
from app.application.utils.form_rules import check_contact_fields, clean_text, positive_or_none
from app.domain.entities.contact_submission import ContactSubmission
from app.domain.entities.submission_status import INITIAL_STATUS, SubmissionKind


class SubmitContactUseCase:
    def __init__(
        self,
        store: SubmissionStorePort,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._store = store
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    def execute(self, form: ContactForm, user_id: str | None = None) -> ContactSubmission:
        errors = check_contact_fields(form.name, form.email)
        if errors:
            raise SubmissionValidationError(errors)

        contact = ContactSubmission(
            id=str(uuid.uuid4()),
            name=clean_text(form.name) or "",
            email=clean_text(form.email) or "",
            created_at=self._clock(),
            status=INITIAL_STATUS[SubmissionKind.contact],
            phone=clean_text(form.phone),
            event_type=clean_text(form.event_type),
            event_date=form.event_date,
            attendees=positive_or_none(form.attendees),
            message=clean_text(form.message),
            user_id=user_id,
        )
        saved = self._store.create_contact(contact)
        self._logger.info(
            "Contact submission stored",
            extra={"kind": SubmissionKind.contact.value, "record_id": saved.id},
        )
        return saved
