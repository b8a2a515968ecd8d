"""Tests for owner-scoped contact find-or-create resolution."""

from __future__ import annotations

import pytest

from bulk_import.db import ContactRecord, PersistenceError, StoreUnavailableError
from bulk_import.jobs import EntityResolver, RelationResolutionError


class _ContactRepositoryStub:
    """In-memory contact repository with case-insensitive owner-scoped lookup."""

    def __init__(self, create_error: Exception | None = None) -> None:
        """Initialize empty contact storage.

        Args:
            create_error: Optional exception raised by every create call.

        Returns:
            None: Initializer does not return values.

        Raises:
            RuntimeError: This stub does not raise runtime errors.
        """

        self.contacts: list[ContactRecord] = []
        self.create_calls = 0
        self._create_error = create_error

    def db_contact_find_by_display_name(self, owner_id: str, display_name: str) -> ContactRecord | None:
        for contact in self.contacts:
            if contact.owner_id == owner_id and contact.display_name.lower() == display_name.lower():
                return contact
        return None

    def db_contact_create(self, owner_id: str, display_name: str) -> ContactRecord:
        self.create_calls += 1
        if self._create_error is not None:
            raise self._create_error
        contact = ContactRecord(contact_id=len(self.contacts) + 1, owner_id=owner_id, display_name=display_name)
        self.contacts.append(contact)
        return contact


def test_jobs_entity_resolver_returns_none_for_blank_names() -> None:
    """Return no relation without touching the repository for blank names."""

    repository = _ContactRepositoryStub()

    assert EntityResolver(repository).job_resolve_contact("   ", "owner-1") is None
    assert EntityResolver(repository).job_resolve_contact(None, "owner-1") is None
    assert repository.create_calls == 0


def test_jobs_entity_resolver_reuses_existing_contact_ignoring_case() -> None:
    """Find an existing contact by case-insensitive name instead of creating one.

    Returns:
        None: Assertions validate find-before-create behavior.

    Raises:
        AssertionError: Raised when a duplicate contact is created.
    """

    repository = _ContactRepositoryStub()
    resolver = EntityResolver(repository)

    first_contact_id = resolver.job_resolve_contact("Jane Doe", "owner-1")
    second_contact_id = resolver.job_resolve_contact("  JANE DOE ", "owner-1")

    assert first_contact_id == second_contact_id
    assert repository.create_calls == 1


def test_jobs_entity_resolver_scopes_contacts_by_owner() -> None:
    """Create separate contacts for the same name under different owners."""

    repository = _ContactRepositoryStub()
    resolver = EntityResolver(repository)

    first_contact_id = resolver.job_resolve_contact("Jane Doe", "owner-1")
    second_contact_id = resolver.job_resolve_contact("Jane Doe", "owner-2")

    assert first_contact_id != second_contact_id
    assert repository.create_calls == 2


def test_jobs_entity_resolver_reports_creation_failure_as_relation_error() -> None:
    """Convert data-level creation failures into RelationResolutionError."""

    resolver = EntityResolver(_ContactRepositoryStub(create_error=PersistenceError("contact create failed")))

    with pytest.raises(RelationResolutionError, match="Jane Doe"):
        resolver.job_resolve_contact("Jane Doe", "owner-1")


def test_jobs_entity_resolver_propagates_store_unavailability() -> None:
    """Let store outages escape so the batch coordinator can abort."""

    resolver = EntityResolver(_ContactRepositoryStub(create_error=StoreUnavailableError("down")))

    with pytest.raises(StoreUnavailableError):
        resolver.job_resolve_contact("Jane Doe", "owner-1")
