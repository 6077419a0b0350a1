from __future__ import annotations

import logging
from datetime import date
from typing import Any

import httpx

from app.application.exceptions import InvalidStatusError, RecordNotFoundError, StoreUnavailableError
from app.application.ports.course_catalog import CourseCatalogPort
from app.application.ports.submission_store import Submission, SubmissionStorePort
from app.core.config import settings
from app.domain.entities.contact_submission import ContactSubmission
from app.domain.entities.course import Course, CourseSession
from app.domain.entities.course_booking import CourseBooking
from app.domain.entities.quote_request import QuoteRequest
from app.domain.entities.submission_status import SubmissionKind
from app.infrastructure.store.records import (
    COURSES_TABLE,
    SESSIONS_TABLE,
    SUBMISSION_TYPES,
    course_from_row,
    from_row,
    session_from_row,
    to_row,
)


class RestRecordStore(CourseCatalogPort, SubmissionStorePort):
    """
    Persistence service reached over a PostgREST-style HTTP API
    (`/table?col=eq.value&order=col.desc`).

    Ids and created_at are assigned by the server. Capacity is not enforced
    here: a booking insert is accepted or refused by the remote service.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = (base_url or settings.PERSISTENCE_URL or "").rstrip("/")
        self._api_key = api_key or settings.PERSISTENCE_API_KEY
        if not self._base_url:
            raise ValueError("PERSISTENCE_URL is required for the REST record store")
        self._client = client or httpx.Client(timeout=timeout or settings.PERSISTENCE_TIMEOUT_SECONDS)
        self._logger = logging.getLogger(__name__)

    def _headers(self, write: bool = False) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._api_key:
            headers["apikey"] = self._api_key
            headers["Authorization"] = f"Bearer {self._api_key}"
        if write:
            headers["Content-Type"] = "application/json"
            headers["Prefer"] = "return=representation"
        return headers

    def _request(
        self,
        method: str,
        table: str,
        params: dict[str, str] | None = None,
        payload: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        url = f"{self._base_url}/{table}"
        try:
            response = self._client.request(
                method,
                url,
                params=params,
                json=payload,
                headers=self._headers(write=payload is not None),
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            self._logger.error(
                "Persistence service rejected request",
                extra={"reason": f"{method} {table} -> {e.response.status_code}"},
            )
            raise StoreUnavailableError(f"{method} {table} failed with {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError) as e:
            self._logger.error("Persistence service unreachable", extra={"reason": f"{method} {table}: {e}"})
            raise StoreUnavailableError(f"{method} {table} failed: {e}") from e

        if isinstance(data, dict):
            return [data]
        return list(data or [])

    def _insert(self, table: str, record: Any) -> dict[str, Any]:
        row = to_row(record)
        # Let the server assign identity and timestamp.
        row.pop("id", None)
        row.pop("created_at", None)
        rows = self._request("POST", table, payload=row)
        if not rows:
            raise StoreUnavailableError(f"Insert into {table} returned no row")
        return rows[0]

    def _map(self, mapper, *args):
        """Turn a row into an entity; rows the entities cannot take are a store fault."""
        try:
            return mapper(*args)
        except (KeyError, TypeError, ValueError) as e:
            self._logger.error("Persistence service returned an unreadable row", extra={"reason": str(e)})
            raise StoreUnavailableError(f"Unreadable row: {e}") from e

    # catalog

    def list_active_courses(self) -> list[Course]:
        rows = self._request("GET", COURSES_TABLE, params={"select": "*", "is_active": "eq.true", "order": "title.asc"})
        return [self._map(course_from_row, row) for row in rows]

    def find_open_sessions(self, course_id: str, today: date) -> list[CourseSession]:
        rows = self._request(
            "GET",
            SESSIONS_TABLE,
            params={
                "select": "*",
                "course_id": f"eq.{course_id}",
                "session_date": f"gte.{today.isoformat()}",
                "available_spots": "gt.0",
                "order": "session_date.asc",
            },
        )
        return [self._map(session_from_row, row) for row in rows]

    def get_session(self, session_id: str) -> CourseSession | None:
        rows = self._request("GET", SESSIONS_TABLE, params={"select": "*", "id": f"eq.{session_id}"})
        return self._map(session_from_row, rows[0]) if rows else None

    def get_course(self, course_id: str) -> Course | None:
        rows = self._request("GET", COURSES_TABLE, params={"select": "*", "id": f"eq.{course_id}"})
        return self._map(course_from_row, rows[0]) if rows else None

    def release_spots(self, session_id: str, count: int) -> None:
        # Read-then-write; the remote service is expected to serialise this for exact counts.
        session = self.get_session(session_id)
        if session is None:
            raise RecordNotFoundError(f"No course session with id {session_id}")
        self._request(
            "PATCH",
            SESSIONS_TABLE,
            params={"id": f"eq.{session_id}"},
            payload={"available_spots": session.available_spots + count},
        )

    # submissions

    def create_quote(self, quote: QuoteRequest) -> QuoteRequest:
        return self._map(from_row, QuoteRequest, self._insert(SubmissionKind.quote.value, quote))

    def create_booking(self, booking: CourseBooking) -> CourseBooking:
        return self._map(from_row, CourseBooking, self._insert(SubmissionKind.booking.value, booking))

    def create_contact(self, contact: ContactSubmission) -> ContactSubmission:
        return self._map(from_row, ContactSubmission, self._insert(SubmissionKind.contact.value, contact))

    def get_submission(self, kind: SubmissionKind, record_id: str) -> Submission | None:
        rows = self._request("GET", kind.value, params={"select": "*", "id": f"eq.{record_id}"})
        return self._map(from_row, SUBMISSION_TYPES[kind], rows[0]) if rows else None

    def list_submissions(self, kind: SubmissionKind, user_id: str | None = None) -> list[Submission]:
        params = {"select": "*", "order": "created_at.desc"}
        if user_id is not None:
            params["user_id"] = f"eq.{user_id}"
        rows = self._request("GET", kind.value, params=params)
        return [self._map(from_row, SUBMISSION_TYPES[kind], row) for row in rows]

    def update_status(
        self, kind: SubmissionKind, record_id: str, status: str, expected_status: str | None = None
    ) -> Submission:
        params = {"id": f"eq.{record_id}"}
        if expected_status is not None:
            params["status"] = f"eq.{expected_status}"
        rows = self._request("PATCH", kind.value, params=params, payload={"status": status})
        if rows:
            return self._map(from_row, SUBMISSION_TYPES[kind], rows[0])

        current = self.get_submission(kind, record_id)
        if current is None:
            raise RecordNotFoundError(f"No {kind.value} record with id {record_id}")
        raise InvalidStatusError(f"{kind.value} {record_id} is now '{current.status}', not '{expected_status}'")
