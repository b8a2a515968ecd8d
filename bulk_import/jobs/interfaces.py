"""Typed interfaces and error taxonomy for job-layer import responsibilities."""

from enum import Enum
from typing import Callable, Protocol

CancellationCheck = Callable[[], bool]


class RowValidationError(ValueError):
    """Raised when one row's normalized data violates a required-field rule."""


class RelationResolutionError(RuntimeError):
    """Raised when a related contact cannot be found or created for a row."""


class ImportAbortedError(RuntimeError):
    """Raised when an infrastructure failure stops the whole batch."""


class ImportCancelledError(RuntimeError):
    """Raised when the caller cancels a batch between rows."""


class ImportTransactionState(str, Enum):
    """Lifecycle states for one import batch."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"
    CANCELLED = "cancelled"


class EntityResolverPort(Protocol):
    """Port definition for owner-scoped find-or-create of related contacts."""

    def job_resolve_contact(self, display_name: str | None, owner_id: str) -> int | None:
        """Resolve one contact display name to a contact identifier.

        Args:
            display_name: Contact display name from the row.
            owner_id: Owning account identifier.

        Returns:
            int | None: Contact identifier, or None when the name is blank.

        Raises:
            RelationResolutionError: Raised when lookup or creation fails for data reasons.
            StoreUnavailableError: Raised when the store is unreachable.
        """
