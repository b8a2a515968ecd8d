"""Database service for owner-scoped contact lookup and creation."""

from __future__ import annotations

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from bulk_import.db.interfaces import ContactRecord, ContactRepositoryPort
from bulk_import.db.session import db_translate_error


class SQLAlchemyContactPersistenceService(ContactRepositoryPort):
    """SQLAlchemy implementation of contact find and create operations."""

    def __init__(self, engine: Engine):
        """Initialize contact persistence service.

        Args:
            engine: SQLAlchemy engine used for all persistence operations.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when engine is invalid.
        """

        if engine is None:
            raise ValueError("engine must not be None")

        self._engine = engine

    def db_contact_find_by_display_name(self, owner_id: str, display_name: str) -> ContactRecord | None:
        """Find one contact by case-insensitive exact display name.

        Args:
            owner_id: Owning account identifier.
            display_name: Contact display name.

        Returns:
            ContactRecord | None: Oldest matching contact or None.

        Raises:
            ValueError: Raised when input values are blank.
            PersistenceError: Raised when the lookup fails.
            StoreUnavailableError: Raised when the store is unreachable.
        """

        normalized_owner_id = _db_contact_validate_non_empty_text(owner_id, "owner_id")
        normalized_display_name = _db_contact_validate_non_empty_text(display_name, "display_name")

        try:
            with self._engine.connect() as connection:
                row = connection.execute(
                    text(
                        "SELECT contact_id, owner_id, display_name FROM contacts "
                        "WHERE owner_id = :owner_id AND LOWER(display_name) = LOWER(:display_name) "
                        "ORDER BY contact_id ASC LIMIT 1"
                    ),
                    {"owner_id": normalized_owner_id, "display_name": normalized_display_name},
                ).mappings().first()
        except SQLAlchemyError as error:
            raise db_translate_error(error, "contact lookup") from error

        if row is None:
            return None
        return ContactRecord(
            contact_id=int(row["contact_id"]),
            owner_id=row["owner_id"],
            display_name=row["display_name"],
        )

    def db_contact_create(self, owner_id: str, display_name: str) -> ContactRecord:
        """Create one contact with empty optional attributes.

        Args:
            owner_id: Owning account identifier.
            display_name: Contact display name.

        Returns:
            ContactRecord: Created contact.

        Raises:
            ValueError: Raised when input values are blank.
            PersistenceError: Raised when the insert fails.
            StoreUnavailableError: Raised when the store is unreachable.
        """

        normalized_owner_id = _db_contact_validate_non_empty_text(owner_id, "owner_id")
        normalized_display_name = _db_contact_validate_non_empty_text(display_name, "display_name")

        try:
            with self._engine.begin() as connection:
                row = connection.execute(
                    text(
                        "INSERT INTO contacts (owner_id, display_name) VALUES (:owner_id, :display_name) "
                        "RETURNING contact_id, owner_id, display_name"
                    ),
                    {"owner_id": normalized_owner_id, "display_name": normalized_display_name},
                ).mappings().one()
        except SQLAlchemyError as error:
            raise db_translate_error(error, "contact create") from error

        return ContactRecord(
            contact_id=int(row["contact_id"]),
            owner_id=row["owner_id"],
            display_name=row["display_name"],
        )


def _db_contact_validate_non_empty_text(value: str, field_name: str) -> str:
    """Validate one required text input.

    Args:
        value: Candidate text.
        field_name: Field name for error messages.

    Returns:
        str: Trimmed text.

    Raises:
        ValueError: Raised when the value is blank.
    """

    normalized_value = (value or "").strip()
    if not normalized_value:
        raise ValueError(f"{field_name} must not be blank")
    return normalized_value
