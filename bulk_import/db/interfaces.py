"""Typed interfaces for database-layer services.

All SQL access must remain in the db package and its submodules.
"""

from dataclasses import dataclass, field
from typing import Protocol

from bulk_import.domain import HealthStatus


class PersistenceError(RuntimeError):
    """Raised when a persistence statement fails for data-level reasons."""


class StoreUnavailableError(ConnectionError):
    """Raised when the backing store cannot be reached or its transaction engine fails."""


class DatabaseHealthPort(Protocol):
    """Port definition for database connectivity verification."""

    def db_connection_label(self) -> str:
        """Return a stable label for the active database connection target.

        Returns:
            str: Database target label for diagnostics.

        Raises:
            RuntimeError: Raised when connection metadata is unavailable.
        """

    def db_check_health(self) -> HealthStatus:
        """Check database connectivity and return deterministic health payload.

        Returns:
            HealthStatus: Database health status payload.

        Raises:
            ConnectionError: Raised when database cannot be reached.
        """


@dataclass(frozen=True)
class ContactRecord:
    """Persisted contact identity.

    Attributes:
        contact_id: Contact primary key.
        owner_id: Owning account identifier.
        display_name: Stored contact display name.
    """

    contact_id: int
    owner_id: str
    display_name: str


@dataclass(frozen=True)
class ImportRecordReference:
    """Identity of one persisted import target record.

    Attributes:
        record_type: Record type name.
        record_id: Record primary key.
        natural_key: Stored business key.
    """

    record_type: str
    record_id: int
    natural_key: str


@dataclass(frozen=True)
class ImportRecordWriteRequest:
    """Insert or update request for one import target record.

    Attributes:
        record_type: Record type name selecting the target table.
        owner_id: Owning account identifier.
        natural_key: Business key for the record.
        contact_id: Related contact identifier, when the record type has one.
        values: Normalized canonical field values excluding the natural key.
    """

    record_type: str
    owner_id: str
    natural_key: str
    contact_id: int | None = None
    values: dict[str, object] = field(default_factory=dict)


class ContactRepositoryPort(Protocol):
    """Port definition for contact lookup and creation."""

    def db_contact_find_by_display_name(self, owner_id: str, display_name: str) -> ContactRecord | None:
        """Find one contact by case-insensitive exact display name.

        Args:
            owner_id: Owning account identifier.
            display_name: Contact display name.

        Returns:
            ContactRecord | None: Oldest matching contact or None.

        Raises:
            PersistenceError: Raised when the lookup fails.
            StoreUnavailableError: Raised when the store is unreachable.
        """

    def db_contact_create(self, owner_id: str, display_name: str) -> ContactRecord:
        """Create one contact with empty optional attributes.

        Args:
            owner_id: Owning account identifier.
            display_name: Contact display name.

        Returns:
            ContactRecord: Created contact.

        Raises:
            PersistenceError: Raised when the insert fails.
            StoreUnavailableError: Raised when the store is unreachable.
        """


class ImportRecordRepositoryPort(Protocol):
    """Port definition for natural-key lookup and atomic writes of import records."""

    def db_import_record_find_by_natural_key(
        self,
        record_type: str,
        owner_id: str,
        natural_key: str,
    ) -> ImportRecordReference | None:
        """Find one existing record by natural key within the owner scope.

        Args:
            record_type: Record type name.
            owner_id: Owning account identifier.
            natural_key: Business key.

        Returns:
            ImportRecordReference | None: Existing record or None.

        Raises:
            PersistenceError: Raised when the lookup fails.
            StoreUnavailableError: Raised when the store is unreachable.
        """

    def db_import_record_insert(self, request: ImportRecordWriteRequest) -> ImportRecordReference:
        """Insert one record atomically.

        Args:
            request: Write request.

        Returns:
            ImportRecordReference: Inserted record identity.

        Raises:
            PersistenceError: Raised when the insert fails.
            StoreUnavailableError: Raised when the store is unreachable.
        """

    def db_import_record_update(self, record_id: int, request: ImportRecordWriteRequest) -> ImportRecordReference:
        """Update one existing record in place atomically.

        Args:
            record_id: Existing record primary key.
            request: Write request.

        Returns:
            ImportRecordReference: Updated record identity.

        Raises:
            PersistenceError: Raised when the update fails or the record vanished.
            StoreUnavailableError: Raised when the store is unreachable.
        """
