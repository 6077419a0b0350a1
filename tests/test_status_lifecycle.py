from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timezone

import pytest

from app.application.exceptions import InvalidStatusError, RecordNotFoundError, StoreUnavailableError
from app.application.use_cases.update_status import UpdateStatusUseCase
from app.domain.entities.contact_submission import ContactSubmission
from app.domain.entities.course_booking import CourseBooking
from app.domain.entities.quote_request import QuoteRequest
from app.domain.entities.submission_status import SubmissionKind, is_allowed_transition
from app.infrastructure.store.memory_store import MemoryRecordStore

from factories import make_courses, make_sessions


def _seed(store):
    created = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
    store.create_quote(
        QuoteRequest(
            id="q1", name="Ada", email="ada@example.com", event_type="Festival", created_at=created,
            expected_attendees=800, service_level="enhanced", estimated_quote=1500,
        )
    )
    store.create_booking(
        CourseBooking(id="b1", session_id="s-early", name="Ben", email="ben@example.com", participants=2, created_at=created)
    )
    store.create_contact(ContactSubmission(id="m1", name="Cy", email="cy@example.com", created_at=created, message="Hi"))


@pytest.mark.parametrize(
    "kind, record_id, target",
    [
        (SubmissionKind.quote, "q1", "accepted"),
        (SubmissionKind.booking, "b1", "completed"),
        (SubmissionKind.contact, "m1", "archived"),
    ],
)
def test_status_change_touches_only_status(record_store, kind, record_id, target):
    _seed(record_store)
    before = asdict(record_store.get_submission(kind, record_id))

    UpdateStatusUseCase(record_store).execute(kind, record_id, target)

    after = asdict(record_store.get_submission(kind, record_id))
    assert after.pop("status") == target
    before.pop("status")
    assert after == before


def test_permissive_mode_allows_any_known_status(record_store):
    _seed(record_store)
    use_case = UpdateStatusUseCase(record_store)

    use_case.execute(SubmissionKind.quote, "q1", "rejected")
    use_case.execute(SubmissionKind.quote, "q1", "new")

    assert record_store.get_submission(SubmissionKind.quote, "q1").status == "new"


def test_unknown_status_for_kind_is_rejected(record_store):
    _seed(record_store)
    with pytest.raises(InvalidStatusError):
        UpdateStatusUseCase(record_store).execute(SubmissionKind.contact, "m1", "confirmed")


def test_unknown_record_is_reported(record_store):
    with pytest.raises(RecordNotFoundError):
        UpdateStatusUseCase(record_store).execute(SubmissionKind.booking, "missing", "confirmed")


def test_strict_mode_enforces_edges(record_store):
    _seed(record_store)
    use_case = UpdateStatusUseCase(record_store, strict_transitions=True)

    with pytest.raises(InvalidStatusError):
        use_case.execute(SubmissionKind.quote, "q1", "accepted")

    use_case.execute(SubmissionKind.quote, "q1", "reviewed")
    use_case.execute(SubmissionKind.quote, "q1", "quoted")
    use_case.execute(SubmissionKind.quote, "q1", "accepted")
    assert record_store.get_submission(SubmissionKind.quote, "q1").status == "accepted"


def test_transition_table_shapes():
    assert is_allowed_transition(SubmissionKind.booking, "pending", "cancelled")
    assert is_allowed_transition(SubmissionKind.booking, "confirmed", "cancelled")
    assert not is_allowed_transition(SubmissionKind.booking, "completed", "pending")
    assert is_allowed_transition(SubmissionKind.contact, "replied", "archived")
    assert not is_allowed_transition(SubmissionKind.contact, "new", "replied")
    assert is_allowed_transition(SubmissionKind.quote, "new", "new")


def test_cancel_keeps_spots_taken_by_default(record_store):
    _seed(record_store)
    spots = record_store.get_session("s-early").available_spots

    UpdateStatusUseCase(record_store, catalog=record_store).execute(SubmissionKind.booking, "b1", "cancelled")

    assert record_store.get_session("s-early").available_spots == spots


def test_cancel_releases_spots_once_when_enabled(record_store):
    _seed(record_store)
    spots = record_store.get_session("s-early").available_spots
    use_case = UpdateStatusUseCase(record_store, catalog=record_store, release_spots_on_cancel=True)

    use_case.execute(SubmissionKind.booking, "b1", "cancelled")
    use_case.execute(SubmissionKind.booking, "b1", "cancelled")

    assert record_store.get_session("s-early").available_spots == spots + 2


def test_store_failure_propagates(record_store):
    _seed(record_store)

    class DownStore(type(record_store)):
        def update_status(self, kind, record_id, status, expected_status=None):
            raise StoreUnavailableError("down")

    store = DownStore()
    store.create_quote(record_store.get_submission(SubmissionKind.quote, "q1"))
    with pytest.raises(StoreUnavailableError):
        UpdateStatusUseCase(store).execute(SubmissionKind.quote, "q1", "reviewed")


class RacingStore(MemoryRecordStore):
    """Another admin cancels each record right after it is read."""

    def get_submission(self, kind, record_id):
        record = super().get_submission(kind, record_id)
        if record is not None:
            super().update_status(kind, record_id, "cancelled")
        return record


def test_strict_mode_refuses_change_when_status_moved_underneath():
    store = RacingStore(courses=make_courses(), sessions=make_sessions())
    _seed(store)
    MemoryRecordStore.update_status(store, SubmissionKind.booking, "b1", "confirmed")

    with pytest.raises(InvalidStatusError):
        UpdateStatusUseCase(store, strict_transitions=True).execute(SubmissionKind.booking, "b1", "completed")

    assert MemoryRecordStore.get_submission(store, SubmissionKind.booking, "b1").status == "cancelled"
