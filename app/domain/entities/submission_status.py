from __future__ import annotations

from enum import Enum


class SubmissionKind(str, Enum):
    quote = "quote_requests"
    booking = "course_bookings"
    contact = "contact_submissions"


class QuoteStatus(str, Enum):
    new = "new"
    reviewed = "reviewed"
    quoted = "quoted"
    accepted = "accepted"
    rejected = "rejected"


class BookingStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    completed = "completed"
    cancelled = "cancelled"


class ContactStatus(str, Enum):
    new = "new"
    read = "read"
    replied = "replied"
    archived = "archived"


STATUS_ENUMS: dict[SubmissionKind, type[Enum]] = {
    SubmissionKind.quote: QuoteStatus,
    SubmissionKind.booking: BookingStatus,
    SubmissionKind.contact: ContactStatus,
}

INITIAL_STATUS: dict[SubmissionKind, str] = {
    SubmissionKind.quote: QuoteStatus.new.value,
    SubmissionKind.booking: BookingStatus.pending.value,
    SubmissionKind.contact: ContactStatus.new.value,
}

# Allowed edges when strict transitions are switched on. A status may always be
# re-set to itself.
ALLOWED_TRANSITIONS: dict[SubmissionKind, dict[str, frozenset[str]]] = {
    SubmissionKind.quote: {
        "new": frozenset({"reviewed"}),
        "reviewed": frozenset({"quoted"}),
        "quoted": frozenset({"accepted", "rejected"}),
        "accepted": frozenset(),
        "rejected": frozenset(),
    },
    SubmissionKind.booking: {
        "pending": frozenset({"confirmed", "cancelled"}),
        "confirmed": frozenset({"completed", "cancelled"}),
        "completed": frozenset(),
        "cancelled": frozenset(),
    },
    SubmissionKind.contact: {
        "new": frozenset({"read", "archived"}),
        "read": frozenset({"replied", "archived"}),
        "replied": frozenset({"archived"}),
        "archived": frozenset(),
    },
}


def allowed_statuses(kind: SubmissionKind) -> list[str]:
    return [member.value for member in STATUS_ENUMS[kind]]


def is_known_status(kind: SubmissionKind, status: str) -> bool:
    return status in allowed_statuses(kind)


def is_allowed_transition(kind: SubmissionKind, current: str, target: str) -> bool:
    if current == target:
        return True
    return target in ALLOWED_TRANSITIONS[kind].get(current, frozenset())
