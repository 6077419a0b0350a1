"""
Tests for the file-backed record store.
"""

from __future__ import annotations

import json
import tempfile
from datetime import date, datetime, timezone
from pathlib import Path

import pytest

from app.application.exceptions import CapacityExceededError, StoreUnavailableError
from app.domain.entities.course_booking import CourseBooking
from app.domain.entities.quote_request import QuoteRequest
from app.domain.entities.submission_status import SubmissionKind
from app.infrastructure.store.json_store import JsonRecordStore

from factories import TODAY, make_courses, make_sessions


def _booking(booking_id: str, participants: int) -> CourseBooking:
    return CourseBooking(
        id=booking_id,
        session_id="s-early",
        name="Gus",
        email="gus@example.com",
        participants=participants,
        created_at=datetime(2026, 3, 1, 8, 30, tzinfo=timezone.utc),
    )


def test_json_store_survives_restart():
    """Records, dates and spot counts written by one store are read back by the next."""
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonRecordStore(data_dir=tmpdir, courses=make_courses(), sessions=make_sessions())
        store.create_quote(
            QuoteRequest(
                id="q1", name="Hal", email="hal@example.com", event_type="Wedding",
                created_at=datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc),
                event_date=date(2026, 6, 20), estimated_quote=375,
            )
        )
        store.create_booking(_booking("b1", 2))
        store.update_status(SubmissionKind.quote, "q1", "reviewed")

        reopened = JsonRecordStore(data_dir=tmpdir)

        quote = reopened.get_submission(SubmissionKind.quote, "q1")
        assert quote.status == "reviewed"
        assert quote.event_date == date(2026, 6, 20)
        assert quote.created_at == datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)
        assert quote.estimated_quote == 375
        assert reopened.get_session("s-early").available_spots == 1
        assert [s.id for s in reopened.find_open_sessions("c-efaw", TODAY)] == ["s-early", "s-late"]
        assert reopened.get_submission(SubmissionKind.booking, "b1").participants == 2


def test_seed_does_not_overwrite_existing_tables():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonRecordStore(data_dir=tmpdir, courses=make_courses(), sessions=make_sessions())
        store.create_booking(_booking("b1", 3))

        reseeded = JsonRecordStore(data_dir=tmpdir, courses=make_courses(), sessions=make_sessions())

        assert reseeded.get_session("s-early").available_spots == 0


def test_capacity_refusal_leaves_files_untouched():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonRecordStore(data_dir=tmpdir, courses=make_courses(), sessions=make_sessions())

        with pytest.raises(CapacityExceededError):
            store.create_booking(_booking("b1", 4))

        assert store.get_session("s-early").available_spots == 3
        assert not (Path(tmpdir) / "course_bookings.json").exists()


def test_corrupted_table_file_loads_as_empty():
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / "contact_submissions.json").write_text("{not json", encoding="utf-8")

        store = JsonRecordStore(data_dir=tmpdir)

        assert store.list_submissions(SubmissionKind.contact) == []


def test_table_file_layout():
    with tempfile.TemporaryDirectory() as tmpdir:
        JsonRecordStore(data_dir=tmpdir, courses=make_courses()[:1])

        data = json.loads((Path(tmpdir) / "training_courses.json").read_text(encoding="utf-8"))

        assert data["table"] == "training_courses"
        assert data["rows"][0]["id"] == "c-efaw"


class FailingTableStore(JsonRecordStore):
    """Raises OSError when saving `failing_table`; other tables save normally."""

    failing_table: str | None = None

    def _stage(self, table):
        if table == self.failing_table:
            raise OSError("disk full")
        return super()._stage(table)


@pytest.mark.parametrize("failing_table", ["course_bookings", "course_sessions"])
def test_failed_booking_save_keeps_spots_on_disk(failing_table):
    """Spots and booking are saved together: if either table fails, neither changes."""
    with tempfile.TemporaryDirectory() as tmpdir:
        store = FailingTableStore(data_dir=tmpdir, courses=make_courses(), sessions=make_sessions())
        store.failing_table = failing_table

        with pytest.raises(StoreUnavailableError):
            store.create_booking(_booking("b1", 2))

        assert store.get_session("s-early").available_spots == 3
        reopened = JsonRecordStore(data_dir=tmpdir)
        assert reopened.get_session("s-early").available_spots == 3
        assert reopened.list_submissions(SubmissionKind.booking) == []
        assert list(Path(tmpdir).glob("*.tmp")) == []


def test_failed_replace_puts_previous_file_back(monkeypatch):
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonRecordStore(data_dir=tmpdir, courses=make_courses(), sessions=make_sessions())
        store.create_booking(_booking("b1", 1))
        original_replace = Path.replace

        def replace(self, target):
            if Path(target).name == "course_sessions.json":
                raise OSError("read-only")
            return original_replace(self, target)

        monkeypatch.setattr(Path, "replace", replace)
        with pytest.raises(StoreUnavailableError):
            store.create_booking(_booking("b2", 1))
        monkeypatch.undo()

        reopened = JsonRecordStore(data_dir=tmpdir)
        assert reopened.get_session("s-early").available_spots == 2
        assert [b.id for b in reopened.list_submissions(SubmissionKind.booking)] == ["b1"]
