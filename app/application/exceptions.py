from __future__ import annotations


class SubmissionValidationError(ValueError):
    """Raised when form input fails a required-field or range check. Never reaches the store."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        summary = "; ".join(f"{field}: {message}" for field, message in self.errors.items())
        super().__init__(summary or "Invalid submission")


class StoreUnavailableError(RuntimeError):
    """Raised when the persistence service fails (network errors, rejected writes, bad responses)."""
    pass


class CapacityExceededError(RuntimeError):
    """Raised by a store that refuses a booking because the session no longer has enough spots."""

    def __init__(self, session_id: str, requested: int, available: int) -> None:
        self.session_id = session_id
        self.requested = requested
        self.available = available
        super().__init__(f"Session {session_id} has {available} spots left, {requested} requested")


class RecordNotFoundError(LookupError):
    """Raised when a submission, course, session or workflow id is unknown."""
    pass


class InvalidStatusError(ValueError):
    """Raised when a status is unknown for the submission kind, or a strict transition is refused."""
    pass


class WorkflowStateError(RuntimeError):
    """Raised when a workflow step is attempted out of order or after submission."""
    pass
