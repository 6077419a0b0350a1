from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from app.domain.entities.course import Course, CourseSession


class CourseCatalogPort(ABC):
    @abstractmethod
    def list_active_courses(self) -> list[Course]:
        """Active training courses ordered by title."""
        raise NotImplementedError

    @abstractmethod
    def find_open_sessions(self, course_id: str, today: date) -> list[CourseSession]:
        """
        Sessions of `course_id` dated on or after `today` with available_spots > 0,
        ascending by date. Returns an empty list when none match.
        """
        raise NotImplementedError

    @abstractmethod
    def get_session(self, session_id: str) -> CourseSession | None:
        raise NotImplementedError

    @abstractmethod
    def get_course(self, course_id: str) -> Course | None:
        raise NotImplementedError

    @abstractmethod
    def release_spots(self, session_id: str, count: int) -> None:
        """Give `count` spots back to a session (paired with the decrement on booking)."""
        raise NotImplementedError
