"""Tests for import API endpoints using in-memory repository stubs."""

from __future__ import annotations

from fastapi.testclient import TestClient

from bulk_import.api.application import create_api_application
from bulk_import.config import AppSettings
from bulk_import.db import ImportRecordReference, ImportRecordWriteRequest, StoreUnavailableError
from bulk_import.domain import HealthStatus
from bulk_import.mapping import FieldMapper


class _HealthyDatabaseService:
    def db_connection_label(self) -> str:
        return "sqlite:///test"

    def db_check_health(self) -> HealthStatus:
        return HealthStatus(status="ok", detail="import store reachable")


class _EntityResolverStub:
    """Resolver stub assigning one id per lowercased name."""

    def __init__(self) -> None:
        self.contact_ids: dict[str, int] = {}

    def job_resolve_contact(self, display_name: str | None, owner_id: str) -> int | None:
        """Return a stable id per name.

        Args:
            display_name: Contact display name.
            owner_id: Owning account identifier.

        Returns:
            int | None: Stub contact id or None for blank names.

        Raises:
            RuntimeError: This stub does not raise runtime errors.
        """

        _ = owner_id
        if not display_name:
            return None
        return self.contact_ids.setdefault(display_name.lower(), len(self.contact_ids) + 1)


class _ImportRecordRepositoryStub:
    """In-memory import record repository."""

    def __init__(self, unavailable: bool = False) -> None:
        self.records: dict[int, ImportRecordWriteRequest] = {}
        self._unavailable = unavailable

    def db_import_record_find_by_natural_key(self, record_type: str, owner_id: str, natural_key: str):
        if self._unavailable:
            raise StoreUnavailableError("quotes lookup failed: store unavailable")
        for record_id, request in self.records.items():
            if (request.record_type, request.owner_id, request.natural_key) == (record_type, owner_id, natural_key):
                return ImportRecordReference(record_type=record_type, record_id=record_id, natural_key=natural_key)
        return None

    def db_import_record_insert(self, request: ImportRecordWriteRequest) -> ImportRecordReference:
        record_id = len(self.records) + 1
        self.records[record_id] = request
        return ImportRecordReference(record_type=request.record_type, record_id=record_id, natural_key=request.natural_key)

    def db_import_record_update(self, record_id: int, request: ImportRecordWriteRequest) -> ImportRecordReference:
        self.records[record_id] = request
        return ImportRecordReference(record_type=request.record_type, record_id=record_id, natural_key=request.natural_key)


def _build_client(record_repository: _ImportRecordRepositoryStub, import_max_rows: int = 5000) -> TestClient:
    """Create a test client around stub dependencies.

    Args:
        record_repository: Import record repository stub.
        import_max_rows: Row limit applied by the router.

    Returns:
        TestClient: Client bound to the API application.

    Raises:
        ValueError: Raised by AppSettings when values are invalid.
    """

    application = create_api_application(
        settings=AppSettings(environment_name="test", database_url="sqlite:///test", import_max_rows=import_max_rows),
        db_health_service=_HealthyDatabaseService(),
        field_mapper=FieldMapper(),
        entity_resolver=_EntityResolverStub(),
        record_repository=record_repository,
    )
    return TestClient(application)


_QUOTE_REQUEST = {
    "owner_id": "owner-1",
    "rows": [
        {"Ref": "Q2025-001", "Client": "Jane Doe", "Event": "May 19, 2025", "Price": "$1,234.56"},
        {"Ref": "", "Client": "Jane Doe", "Event": "19/05/2025", "Price": "10"},
        {"Ref": "Q2025-003", "Client": "Acme", "Event": "2025/05/19", "Price": "USD 1234.56"},
    ],
    "mapping": {
        "quote_number": {"primary_column": "Ref", "required": True, "display_name": "Quote Number"},
        "event_date": {"primary_column": "Event", "alternative_names": ["Date"]},
        "total": {"alternative_names": ["Price"]},
    },
}


def test_api_import_run_returns_result_payload_with_row_errors() -> None:
    """Return the camelCase result payload with partial row errors.

    Returns:
        None: Assertions validate wire payload shape and counts.

    Raises:
        AssertionError: Raised when payload differs from expected contract.
    """

    response = _build_client(_ImportRecordRepositoryStub()).post("/imports/quotes", json=_QUOTE_REQUEST)

    assert response.status_code == 200
    payload = response.json()
    assert payload["successCount"] == 2
    assert payload["errorCount"] == 1
    assert payload["skippedCount"] == 0
    assert payload["errors"] == [{"row": 2, "message": "Quote Number is required"}]
    assert payload["message"] == "Successfully imported 2 quotes with 1 error."
    first_detail = payload["successDetails"][0]
    assert first_detail["naturalKey"] == "Q2025-001"
    assert first_detail["updated"] is False
    assert first_detail["contactId"] == 1
    assert first_detail["event_date"] == "2025-05-19"
    assert first_detail["total"] == "1234.56"


def test_api_import_run_rejects_missing_required_column() -> None:
    """Return HTTP 400 naming the unresolved required fields."""

    request = dict(_QUOTE_REQUEST)
    request["mapping"] = {"expiry_date": {"primary_column": "Expiry", "required": True}}

    response = _build_client(_ImportRecordRepositoryStub()).post("/imports/quotes", json=request)

    assert response.status_code == 400
    assert response.json()["code"] == "MISSING_REQUIRED_FIELD"
    assert response.json()["missing_fields"] == ["expiry_date"]


def test_api_import_run_rejects_unknown_mapping_fields() -> None:
    """Return HTTP 400 when the mapping names fields the record type lacks."""

    request = dict(_QUOTE_REQUEST)
    request["mapping"] = {"colour": {"primary_column": "Colour"}}

    response = _build_client(_ImportRecordRepositoryStub()).post("/imports/quotes", json=request)

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_MAPPING"


def test_api_import_run_rejects_unknown_record_type() -> None:
    """Return HTTP 404 for record types outside the catalogue."""

    client = _build_client(_ImportRecordRepositoryStub())

    assert client.post("/imports/invoices", json=_QUOTE_REQUEST).status_code == 404
    assert client.get("/imports/invoices/fields").status_code == 404


def test_api_import_run_rejects_oversized_batches() -> None:
    """Return HTTP 413 when the batch exceeds the configured row limit."""

    response = _build_client(_ImportRecordRepositoryStub(), import_max_rows=2).post("/imports/quotes", json=_QUOTE_REQUEST)

    assert response.status_code == 413
    assert response.json()["code"] == "ROW_LIMIT_EXCEEDED"


def test_api_import_run_reports_abort_as_service_unavailable() -> None:
    """Return HTTP 503 and no partial result when the store is unavailable."""

    response = _build_client(_ImportRecordRepositoryStub(unavailable=True)).post("/imports/quotes", json=_QUOTE_REQUEST)

    assert response.status_code == 503
    assert response.json()["code"] == "IMPORT_ABORTED"
    assert "successCount" not in response.json()


def test_api_import_fields_lists_catalogue_fields() -> None:
    """Describe canonical fields, kinds and the natural key for a record type."""

    response = _build_client(_ImportRecordRepositoryStub()).get("/imports/orders/fields")

    assert response.status_code == 200
    payload = response.json()
    assert payload["natural_key_field"] == "order_number"
    assert payload["natural_key_required"] is False
    fields_by_name = {field["name"]: field for field in payload["fields"]}
    assert fields_by_name["order_number"]["natural_key"] is True
    assert fields_by_name["event_date"]["kind"] == "date"
    assert fields_by_name["status"]["default"] == "Draft"
