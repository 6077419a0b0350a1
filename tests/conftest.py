from __future__ import annotations

import pytest

from app.application.use_cases.booking import BookingWorkflowUseCase
from app.infrastructure.store.memory_store import MemoryRecordStore, MemoryWorkflowStore

from factories import LONDON, fixed_clock, make_courses, make_sessions


@pytest.fixture
def record_store() -> MemoryRecordStore:
    return MemoryRecordStore(courses=make_courses(), sessions=make_sessions())


@pytest.fixture
def workflow_store() -> MemoryWorkflowStore:
    return MemoryWorkflowStore()


@pytest.fixture
def booking_use_case(record_store, workflow_store) -> BookingWorkflowUseCase:
    return BookingWorkflowUseCase(
        catalog=record_store,
        store=record_store,
        workflows=workflow_store,
        timezone=LONDON,
        clock=fixed_clock,
    )
