from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.contact_submission import ContactSubmission
from app.domain.entities.course_booking import CourseBooking
from app.domain.entities.quote_request import QuoteRequest
from app.domain.entities.submission_status import SubmissionKind

Submission = QuoteRequest | CourseBooking | ContactSubmission


class SubmissionStorePort(ABC):
    @abstractmethod
    def create_quote(self, quote: QuoteRequest) -> QuoteRequest:
        raise NotImplementedError

    @abstractmethod
    def create_booking(self, booking: CourseBooking) -> CourseBooking:
        """
        Record a booking against its session.

        Adapters that own the session table take the spots in the same atomic
        step and raise CapacityExceededError when too few are left.
        """
        raise NotImplementedError

    @abstractmethod
    def create_contact(self, contact: ContactSubmission) -> ContactSubmission:
        raise NotImplementedError

    @abstractmethod
    def get_submission(self, kind: SubmissionKind, record_id: str) -> Submission | None:
        raise NotImplementedError

    @abstractmethod
    def list_submissions(self, kind: SubmissionKind, user_id: str | None = None) -> list[Submission]:
        """Submissions of one kind, newest first. `user_id` restricts to one owner."""
        raise NotImplementedError

    @abstractmethod
    def update_status(
        self, kind: SubmissionKind, record_id: str, status: str, expected_status: str | None = None
    ) -> Submission:
        """
        Set `status` and nothing else. Raises RecordNotFoundError for unknown ids.

        With `expected_status` the change only applies if the record still has
        that status; otherwise InvalidStatusError is raised.
        """
        raise NotImplementedError
