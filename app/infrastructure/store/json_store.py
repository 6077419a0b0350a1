from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from app.application.exceptions import StoreUnavailableError
from app.domain.entities.course import Course, CourseSession
from app.domain.entities.submission_status import SubmissionKind
from app.infrastructure.store.memory_store import MemoryRecordStore
from app.infrastructure.store.records import (
    COURSES_TABLE,
    SESSIONS_TABLE,
    SUBMISSION_TYPES,
    course_from_row,
    from_row,
    session_from_row,
    to_row,
)


class JsonRecordStore(MemoryRecordStore):
    """
    File-backed variant of the memory store: one JSON file per table under
    `data_dir`. A mutation saves every table it touched, all or nothing.
    """

    def __init__(
        self,
        data_dir: str = "./data/records",
        courses: list[Course] | None = None,
        sessions: list[CourseSession] | None = None,
    ) -> None:
        super().__init__()
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._logger = logging.getLogger(__name__)
        self._load()

        # Seed rows only fill tables that are still empty on disk.
        if courses and not self._courses:
            for course in courses:
                self.add_course(course)
        if sessions and not self._sessions:
            for session in sessions:
                self.add_session(session)

    def _get_file_path(self, table: str) -> Path:
        return self._data_dir / f"{table}.json"

    def _load_rows(self, table: str) -> list[dict[str, Any]]:
        """Load rows for a table, empty if the file is missing or corrupted."""
        file_path = self._get_file_path(table)
        if not file_path.exists():
            return []
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            self._logger.error("Unreadable table file", extra={"reason": f"{file_path}: {e}"})
            return []
        return data.get("rows", []) if isinstance(data, dict) else []

    def _load(self) -> None:
        self._courses = {row["id"]: course_from_row(row) for row in self._load_rows(COURSES_TABLE)}
        self._sessions = {row["id"]: session_from_row(row) for row in self._load_rows(SESSIONS_TABLE)}
        for kind, entity_type in SUBMISSION_TYPES.items():
            self._submissions[kind] = {
                row["id"]: from_row(entity_type, row) for row in self._load_rows(kind.value)
            }

    def _rows_for(self, table: str) -> list[dict[str, Any]]:
        if table == COURSES_TABLE:
            return [to_row(c) for c in self._courses.values()]
        if table == SESSIONS_TABLE:
            return [to_row(s) for s in self._sessions.values()]
        return [to_row(r) for r in self._submissions[SubmissionKind(table)].values()]

    def _stage(self, table: str) -> Path:
        """Write a table's rows to a temp file next to its JSON file."""
        temp_path = self._get_file_path(table).with_suffix(".json.tmp")
        data = {"table": table, "rows": self._rows_for(table), "version": 1}
        with open(temp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        return temp_path

    def _persist(self, tables: set[str]) -> None:
        """
        Save every table a mutation touched, or none of them.

        All temp files are written before any table file is replaced. If a
        replace fails, tables already replaced get their previous file back.
        """
        staged: dict[str, Path] = {}
        previous: dict[str, bytes | None] = {}
        replaced: list[str] = []
        try:
            for table in sorted(tables):
                staged[table] = self._stage(table)
            for table, temp_path in staged.items():
                file_path = self._get_file_path(table)
                previous[table] = file_path.read_bytes() if file_path.exists() else None
                temp_path.replace(file_path)
                replaced.append(table)
        except OSError as e:
            for table in replaced:
                self._restore_file(table, previous[table])
            for table in tables:
                self._get_file_path(table).with_suffix(".json.tmp").unlink(missing_ok=True)
            raise StoreUnavailableError(f"Could not save {', '.join(sorted(tables))}: {e}") from e

    def _restore_file(self, table: str, content: bytes | None) -> None:
        file_path = self._get_file_path(table)
        try:
            if content is None:
                file_path.unlink(missing_ok=True)
            else:
                file_path.write_bytes(content)
        except OSError as e:
            self._logger.error("Could not restore table file", extra={"reason": f"{file_path}: {e}"})
