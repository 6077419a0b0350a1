"""
HTTP tests for the public forms, the booking wizard, the portal and the admin views.
"""

from __future__ import annotations

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from app.core.config import settings
from app.domain.entities.course import CourseSession
from app.infrastructure.store.memory_store import MemoryRecordStore
from app.main import app
from app.wiring import dependencies

from factories import make_courses


@pytest.fixture
def store(monkeypatch) -> MemoryRecordStore:
    today = date.today()
    sessions = [
        CourseSession(id="s-a", course_id="c-efaw", session_date=today + timedelta(days=9), start_time="09:00", location="Leeds", available_spots=5),
        CourseSession(id="s-b", course_id="c-efaw", session_date=today + timedelta(days=3), start_time="10:00", location="York", available_spots=2),
    ]
    record_store = MemoryRecordStore(courses=make_courses(), sessions=sessions)
    monkeypatch.setattr(dependencies, "_record_store", record_store)
    monkeypatch.setattr(settings, "ADMIN_API_TOKEN", "s3cret")
    dependencies.get_workflow_store.cache_clear()
    return record_store


@pytest.fixture
def client(store) -> TestClient:
    return TestClient(app)


ADMIN = {"X-Admin-Token": "s3cret"}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_quote_options_and_estimate(client):
    options = client.get("/api/v1/quotes/options").json()
    assert [level["value"] for level in options["service_levels"]] == ["basic", "standard", "enhanced", "comprehensive"]
    assert "Festival" in options["event_types"]

    response = client.post(
        "/api/v1/quotes/estimate",
        json={"expected_attendees": 500, "event_duration_hours": 4, "service_level": "standard"},
    )
    assert response.json()["estimated_quote"] == 675


def test_quote_submission_and_validation(client):
    response = client.post(
        "/api/v1/quotes",
        json={"name": "Kay", "email": "kay@example.com", "event_type": "Festival", "expected_attendees": 6000},
        headers={"X-User-Id": "user-7"},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["estimated_quote"] == 2500
    assert body["status"] == "new"
    assert body["user_id"] == "user-7"

    bad = client.post("/api/v1/quotes", json={"name": "", "email": "nope", "event_type": "Festival"})
    assert bad.status_code == 422
    assert set(bad.json()["detail"]) == {"name", "email"}


def test_booking_wizard_end_to_end(client, store):
    started = client.post("/api/v1/bookings/workflows", headers={"X-User-Id": "user-3"})
    assert started.status_code == 201
    workflow_id = started.json()["workflow_id"]

    chosen = client.post(f"/api/v1/bookings/workflows/{workflow_id}/course", json={"course_id": "c-efaw"}).json()
    assert chosen["action"] == "choose_session"
    assert [s["id"] for s in chosen["sessions"]] == ["s-b", "s-a"]

    picked = client.post(f"/api/v1/bookings/workflows/{workflow_id}/session", json={"session_id": "s-b"}).json()
    assert picked["status"] == "session_selected"
    assert picked["max_participants"] == 2

    too_many = client.post(
        f"/api/v1/bookings/workflows/{workflow_id}/submit",
        json={"name": "Lee", "email": "lee@example.com", "participants": 3},
    )
    assert too_many.status_code == 422
    assert "participants" in too_many.json()["detail"]

    booked = client.post(
        f"/api/v1/bookings/workflows/{workflow_id}/submit",
        json={"name": "Lee", "email": "lee@example.com", "participants": 2},
    ).json()
    assert booked["status"] == "submitted"
    assert booked["confirmation"]["total_price"] == 190.0
    assert booked["confirmation"]["location"] == "York"

    again = client.post(
        f"/api/v1/bookings/workflows/{workflow_id}/submit",
        json={"name": "Lee", "email": "lee@example.com", "participants": 1},
    )
    assert again.status_code == 409

    portal = client.get("/api/v1/portal/submissions", headers={"X-User-Id": "user-3"}).json()
    assert len(portal["bookings"]) == 1
    assert portal["bookings"][0]["course_title"] == "Emergency First Aid at Work"


def test_course_without_dates_says_contact_us(client):
    workflow_id = client.post("/api/v1/bookings/workflows").json()["workflow_id"]
    response = client.post(f"/api/v1/bookings/workflows/{workflow_id}/course", json={"course_id": "c-faw"}).json()
    assert response["action"] == "contact_us"
    assert response["sessions"] == []


def test_unknown_workflow_is_404(client):
    assert client.get("/api/v1/bookings/workflows/does-not-exist").status_code == 404


def test_abandon_discards_workflow(client):
    workflow_id = client.post("/api/v1/bookings/workflows").json()["workflow_id"]
    assert client.delete(f"/api/v1/bookings/workflows/{workflow_id}").status_code == 204
    assert client.get(f"/api/v1/bookings/workflows/{workflow_id}").status_code == 404


def test_portal_requires_user(client):
    assert client.get("/api/v1/portal/submissions").status_code == 401


def test_admin_requires_token(client):
    assert client.get("/api/v1/admin/quotes").status_code == 403
    assert client.get("/api/v1/admin/quotes", headers={"X-Admin-Token": "wrong"}).status_code == 403


def test_admin_updates_status_and_both_views_see_it(client):
    contact = client.post(
        "/api/v1/contact",
        json={"name": "Max", "email": "max@example.com", "message": "Cover for a 10k run?"},
        headers={"X-User-Id": "user-5"},
    ).json()

    response = client.patch(f"/api/v1/admin/contacts/{contact['id']}/status", json={"status": "read"}, headers=ADMIN)
    assert response.json() == {"id": contact["id"], "status": "read"}

    admin_view = client.get("/api/v1/admin/contacts", headers=ADMIN).json()
    portal_view = client.get("/api/v1/portal/submissions", headers={"X-User-Id": "user-5"}).json()
    assert admin_view["records"][0]["status"] == "read"
    assert portal_view["inquiries"][0]["status"] == "read"
    assert portal_view["inquiries"][0]["message"] == "Cover for a 10k run?"


def test_admin_status_errors(client):
    quote = client.post(
        "/api/v1/quotes", json={"name": "Nia", "email": "nia@example.com", "event_type": "Wedding"}
    ).json()

    wrong_status = client.patch(f"/api/v1/admin/quotes/{quote['id']}/status", json={"status": "archived"}, headers=ADMIN)
    missing = client.patch("/api/v1/admin/quotes/nope/status", json={"status": "reviewed"}, headers=ADMIN)
    wrong_kind = client.patch(f"/api/v1/admin/widgets/{quote['id']}/status", json={"status": "new"}, headers=ADMIN)

    assert wrong_status.status_code == 422
    assert missing.status_code == 404
    assert wrong_kind.status_code == 404


def test_admin_lists_statuses(client):
    response = client.get("/api/v1/admin/bookings/statuses", headers=ADMIN)
    assert response.json() == ["pending", "confirmed", "completed", "cancelled"]
