from functools import lru_cache
import logging
from datetime import datetime
from zoneinfo import ZoneInfo

from app.core.config import settings
from app.application.ports.course_catalog import CourseCatalogPort
from app.application.ports.submission_store import SubmissionStorePort
from app.application.ports.workflow_store import WorkflowStorePort
from app.application.use_cases.booking import BookingWorkflowUseCase
from app.application.use_cases.list_submissions import ListSubmissionsUseCase
from app.application.use_cases.submit_contact import SubmitContactUseCase
from app.application.use_cases.submit_quote import SubmitQuoteUseCase
from app.application.use_cases.update_status import UpdateStatusUseCase
from app.infrastructure.catalog.seed_data import DEMO_COURSES, demo_sessions
from app.infrastructure.store.json_store import JsonRecordStore
from app.infrastructure.store.memory_store import MemoryRecordStore, MemoryWorkflowStore
from app.infrastructure.store.rest_store import RestRecordStore


_record_store: MemoryRecordStore | JsonRecordStore | RestRecordStore | None = None


def _build_record_store() -> MemoryRecordStore | JsonRecordStore | RestRecordStore:
    logger = logging.getLogger(__name__)
    logger.info("ENV=%s", settings.ENV)

    if settings.PERSISTENCE_URL:
        logger.info("Using RestRecordStore")
        return RestRecordStore()

    courses = list(DEMO_COURSES) if settings.SEED_DEMO_CATALOG else None
    sessions = None
    if settings.SEED_DEMO_CATALOG:
        sessions = demo_sessions(datetime.now(get_timezone()).date())

    if settings.ENV.lower() in {"dev", "local"}:
        logger.info("Using JsonRecordStore at %s (ENV=dev/local)", settings.DATA_DIR)
        return JsonRecordStore(data_dir=settings.DATA_DIR, courses=courses, sessions=sessions)

    logger.info("Using MemoryRecordStore")
    return MemoryRecordStore(courses=courses, sessions=sessions)


def get_record_store() -> MemoryRecordStore | JsonRecordStore | RestRecordStore:
    global _record_store
    if _record_store is None:
        _record_store = _build_record_store()
    return _record_store


def get_catalog() -> CourseCatalogPort:
    return get_record_store()


def get_submission_store() -> SubmissionStorePort:
    return get_record_store()


@lru_cache
def get_workflow_store() -> WorkflowStorePort:
    return MemoryWorkflowStore(limit=settings.WORKFLOW_LIMIT)


@lru_cache
def get_timezone() -> ZoneInfo:
    return ZoneInfo(settings.BUSINESS_TIMEZONE)


def get_booking_workflow_use_case() -> BookingWorkflowUseCase:
    return BookingWorkflowUseCase(
        catalog=get_catalog(),
        store=get_submission_store(),
        workflows=get_workflow_store(),
        timezone=get_timezone(),
    )


def get_submit_quote_use_case() -> SubmitQuoteUseCase:
    return SubmitQuoteUseCase(store=get_submission_store())


def get_submit_contact_use_case() -> SubmitContactUseCase:
    return SubmitContactUseCase(store=get_submission_store())


def get_update_status_use_case() -> UpdateStatusUseCase:
    return UpdateStatusUseCase(
        store=get_submission_store(),
        catalog=get_catalog(),
        strict_transitions=settings.STRICT_STATUS_TRANSITIONS,
        release_spots_on_cancel=settings.RELEASE_SPOTS_ON_CANCEL,
    )


def get_list_submissions_use_case() -> ListSubmissionsUseCase:
    return ListSubmissionsUseCase(store=get_submission_store(), catalog=get_catalog())
