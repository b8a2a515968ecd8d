"""Owner-scoped find-or-create resolution of related contacts by display name."""

from __future__ import annotations

import logging

from bulk_import.db import ContactRepositoryPort, PersistenceError
from bulk_import.domain import domain_normalize_text

from .interfaces import EntityResolverPort, RelationResolutionError

logger = logging.getLogger(__name__)


class EntityResolver(EntityResolverPort):
    """Resolve contact names to identifiers, creating missing contacts on demand.

    Not safe for concurrent use against the same owner: two callers resolving the
    same new name at once may both create a contact. Import batches call it from a
    single thread, one row at a time.
    """

    def __init__(self, contact_repository: ContactRepositoryPort):
        """Initialize entity resolver dependencies.

        Args:
            contact_repository: DB-layer contact lookup and creation service.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when contact_repository is None.
        """

        if contact_repository is None:
            raise ValueError("contact_repository must not be None")
        self._contact_repository = contact_repository

    def job_resolve_contact(self, display_name: str | None, owner_id: str) -> int | None:
        """Resolve one contact display name to a contact identifier.

        Args:
            display_name: Contact display name from the row.
            owner_id: Owning account identifier.

        Returns:
            int | None: Existing or newly created contact id, or None when the name is blank.

        Raises:
            RelationResolutionError: Raised when lookup or creation fails for data reasons.
            StoreUnavailableError: Raised when the store is unreachable.
        """

        normalized_name = domain_normalize_text(display_name)
        if normalized_name is None:
            return None

        try:
            existing_contact = self._contact_repository.db_contact_find_by_display_name(
                owner_id=owner_id,
                display_name=normalized_name,
            )
            if existing_contact is not None:
                return existing_contact.contact_id

            created_contact = self._contact_repository.db_contact_create(
                owner_id=owner_id,
                display_name=normalized_name,
            )
        except (PersistenceError, ValueError) as error:
            raise RelationResolutionError(f"could not resolve contact '{normalized_name}': {error}") from error

        logger.info("Created contact %s for owner %s: %s", created_contact.contact_id, owner_id, normalized_name)
        return created_contact.contact_id
