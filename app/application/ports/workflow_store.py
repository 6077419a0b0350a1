from abc import ABC, abstractmethod

from app.domain.entities.booking_workflow_state import BookingWorkflowState


class WorkflowStorePort(ABC):
    @abstractmethod
    def get(self, workflow_id: str) -> BookingWorkflowState | None:
        raise NotImplementedError

    @abstractmethod
    def put(self, state: BookingWorkflowState) -> None:
        raise NotImplementedError

    @abstractmethod
    def discard(self, workflow_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def swap(self, expected: BookingWorkflowState, updated: BookingWorkflowState) -> bool:
        """Store `updated` only if `expected` is still the stored state. Returns whether it did."""
        raise NotImplementedError
