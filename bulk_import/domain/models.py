"""Typed domain models shared across runtime layers.

This module provides data contracts for import results and health checks that
cross the job, API, and CLI boundaries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class HealthStatus:
    """Health response contract used by health-check surfaces.

    Attributes:
        status: Overall status text for service health.
        detail: Additional message suitable for operational diagnostics.
    """

    status: str
    detail: str


@dataclass(frozen=True)
class ImportRowError:
    """One row-scoped import failure.

    Attributes:
        row: 1-based source row index.
        message: Human-readable failure message.
    """

    row: int
    message: str


@dataclass(frozen=True)
class ImportAcceptedRecord:
    """One record accepted and persisted during an import batch.

    Attributes:
        row: 1-based source row index.
        record_id: Persisted record identifier.
        natural_key: Business key used for the upsert decision.
        updated: True when an existing record was updated in place.
        contact_id: Resolved related contact identifier, when any.
        values: Normalized canonical field values written for the record.
    """

    row: int
    record_id: int
    natural_key: str
    updated: bool
    contact_id: int | None = None
    values: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class ImportResult:
    """Final outcome of one import batch.

    Attributes:
        record_type: Imported record type name.
        success_count: Number of rows persisted.
        error_count: Number of rows rejected.
        skipped_count: Number of blank or summary rows ignored.
        errors: Ordered row errors.
        success_details: Ordered accepted records.
        message: Human summary of the batch outcome.
    """

    record_type: str
    success_count: int
    error_count: int
    skipped_count: int
    errors: tuple[ImportRowError, ...]
    success_details: tuple[ImportAcceptedRecord, ...]
    message: str

    def import_result_to_payload(self) -> dict[str, object]:
        """Render the result into its JSON wire payload.

        Returns:
            dict[str, object]: JSON-compatible payload with camelCase keys.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        return {
            "successCount": self.success_count,
            "errorCount": self.error_count,
            "skippedCount": self.skipped_count,
            "errors": [{"row": error.row, "message": error.message} for error in self.errors],
            "successDetails": [_domain_accepted_record_payload(record) for record in self.success_details],
            "message": self.message,
        }


def _domain_accepted_record_payload(record: ImportAcceptedRecord) -> dict[str, object]:
    """Render one accepted record into JSON-compatible values.

    Args:
        record: Accepted record.

    Returns:
        dict[str, object]: Payload with dates as ISO text and decimals as strings.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    payload: dict[str, object] = {
        "row": record.row,
        "id": record.record_id,
        "naturalKey": record.natural_key,
        "updated": record.updated,
        "contactId": record.contact_id,
    }
    for field_name, value in record.values.items():
        if isinstance(value, date):
            payload[field_name] = value.isoformat()
        elif isinstance(value, Decimal):
            payload[field_name] = str(value)
        else:
            payload[field_name] = value
    return payload
