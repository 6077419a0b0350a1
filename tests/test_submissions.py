from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from app.application.dto.forms import ContactForm, QuoteForm
from app.application.exceptions import StoreUnavailableError, SubmissionValidationError
from app.application.use_cases.list_submissions import LIST_UNAVAILABLE_MESSAGE, ListSubmissionsUseCase
from app.application.use_cases.submit_contact import SubmitContactUseCase
from app.application.use_cases.submit_quote import SubmitQuoteUseCase
from app.domain.entities.course_booking import CourseBooking
from app.domain.entities.submission_status import SubmissionKind
from app.infrastructure.store.memory_store import MemoryRecordStore


class Ticker:
    def __init__(self) -> None:
        self.now = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.now += timedelta(minutes=1)
        return self.now


def _quote_form(**overrides) -> QuoteForm:
    values = {
        "name": "Dana Reid",
        "email": "dana@example.com",
        "event_type": "Concert",
        "event_date": date(2026, 7, 4),
        "event_duration_hours": 8,
        "expected_attendees": 500,
        "service_level": "standard",
    }
    values.update(overrides)
    return QuoteForm(**values)


def test_quote_snapshot_is_stored(record_store):
    quote = SubmitQuoteUseCase(record_store).execute(_quote_form(), user_id="user-1")

    stored = record_store.get_submission(SubmissionKind.quote, quote.id)
    assert stored.estimated_quote == 1350
    assert stored.status == "new"
    assert stored.user_id == "user-1"


def test_quote_with_unspecified_numbers_gets_minimum_estimate(record_store):
    quote = SubmitQuoteUseCase(record_store).execute(
        _quote_form(expected_attendees=0, event_duration_hours=-2, service_level=None)
    )
    assert quote.estimated_quote == 250
    assert quote.expected_attendees is None
    assert quote.event_duration_hours is None


def test_quote_requires_contact_and_event_type(record_store):
    with pytest.raises(SubmissionValidationError) as excinfo:
        SubmitQuoteUseCase(record_store).execute(_quote_form(name="", email="", event_type=" "))
    assert set(excinfo.value.errors) == {"name", "email", "event_type"}
    assert record_store.list_submissions(SubmissionKind.quote) == []


def test_quote_rejects_unknown_service_level(record_store):
    with pytest.raises(SubmissionValidationError) as excinfo:
        SubmitQuoteUseCase(record_store).execute(_quote_form(service_level="gold"))
    assert "service_level" in excinfo.value.errors


def test_contact_submission_defaults(record_store):
    contact = SubmitContactUseCase(record_store).execute(
        ContactForm(name="Eli", email="eli@example.com", message="  Do you cover weddings?  ", attendees=0)
    )
    assert contact.status == "new"
    assert contact.message == "Do you cover weddings?"
    assert contact.attendees is None


def test_listings_are_newest_first_and_scoped_to_owner(record_store):
    clock = Ticker()
    use_case = SubmitQuoteUseCase(record_store, clock=clock)
    first = use_case.execute(_quote_form(), user_id="owner")
    use_case.execute(_quote_form(), user_id="someone-else")
    third = use_case.execute(_quote_form(), user_id="owner")

    listing = ListSubmissionsUseCase(record_store, record_store)
    admin = listing.for_admin(SubmissionKind.quote)
    mine = listing.for_user("owner")

    assert len(admin.records) == 3
    assert admin.records[0].id == third.id
    assert [r.id for r in mine[SubmissionKind.quote].records] == [third.id, first.id]
    assert mine[SubmissionKind.booking].records == []


def test_booking_listing_is_enriched_with_course_and_session(record_store):
    record_store.create_booking(
        CourseBooking(
            id="b1", session_id="s-early", name="Fay", email="fay@example.com", participants=1,
            created_at=datetime(2026, 3, 1, tzinfo=timezone.utc),
        )
    )

    listing = ListSubmissionsUseCase(record_store, record_store).for_admin(SubmissionKind.booking)

    entry = listing.bookings[0]
    assert entry.course.title == "Emergency First Aid at Work"
    assert entry.session.location == "Manchester"


def test_list_failure_returns_empty_with_notice():
    class DownStore(MemoryRecordStore):
        def list_submissions(self, kind, user_id=None):
            raise StoreUnavailableError("down")

    store = DownStore()
    listing = ListSubmissionsUseCase(store, store).for_admin(SubmissionKind.contact)

    assert listing.records == []
    assert listing.notice == LIST_UNAVAILABLE_MESSAGE
