"""Tests for the `/health` endpoint and the service index."""

from fastapi.testclient import TestClient

from bulk_import.api.application import create_api_application
from bulk_import.config import AppSettings
from bulk_import.db import HEALTH_STATUS_READY, HEALTH_STATUS_UNMIGRATED
from bulk_import.domain import HealthStatus
from bulk_import.mapping import FieldMapper


class _ImportStoreHealthStub:
    """Health service returning a fixed status, or raising when unreachable."""

    def __init__(self, health: HealthStatus | None) -> None:
        self._health = health

    def db_connection_label(self) -> str:
        return "sqlite:///imports.db"

    def db_check_health(self) -> HealthStatus:
        if self._health is None:
            raise ConnectionError("import store is unreachable")
        return self._health


class _UnusedImportDependency:
    """Stands in for import dependencies the health endpoint never calls."""


def _get_health(health: HealthStatus | None):
    application = create_api_application(
        settings=AppSettings(environment_name="test", database_url="sqlite:///imports.db"),
        db_health_service=_ImportStoreHealthStub(health),
        field_mapper=FieldMapper(),
        entity_resolver=_UnusedImportDependency(),
        record_repository=_UnusedImportDependency(),
    )
    return TestClient(application).get("/health")


def test_api_health_reports_ready_import_store() -> None:
    """Return HTTP 200 when every import table is present.

    Returns:
        None: Assertions validate the ready payload.

    Raises:
        AssertionError: Raised when the payload or status code differs.
    """

    response = _get_health(HealthStatus(status=HEALTH_STATUS_READY, detail="4 import tables present"))

    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "app": "up",
        "database": "ok",
        "detail": "4 import tables present",
        "target": "sqlite:///imports.db",
    }


def test_api_health_reports_unmigrated_store_as_unavailable() -> None:
    """Return HTTP 503 naming missing tables when migrations have not run."""

    response = _get_health(HealthStatus(status=HEALTH_STATUS_UNMIGRATED, detail="missing import tables: quotes"))

    assert response.status_code == 503
    assert response.json()["status"] == "degraded"
    assert response.json()["database"] == "unmigrated"
    assert response.json()["detail"] == "missing import tables: quotes"


def test_api_health_reports_unreachable_store_as_down() -> None:
    """Return HTTP 503 with the store target when the store cannot be reached."""

    response = _get_health(None)

    assert response.status_code == 503
    assert response.json()["database"] == "down"
    assert response.json()["detail"] == "import store is unreachable"
    assert response.json()["target"] == "sqlite:///imports.db"


def test_api_index_lists_record_types() -> None:
    """Expose importable record types on the service index."""

    application = create_api_application(
        settings=AppSettings(environment_name="test", database_url="sqlite:///imports.db"),
        db_health_service=_ImportStoreHealthStub(None),
        field_mapper=FieldMapper(),
        entity_resolver=_UnusedImportDependency(),
        record_repository=_UnusedImportDependency(),
    )

    response = TestClient(application).get("/")

    assert response.status_code == 200
    assert response.json()["record_types"] == ["contacts", "ingredients", "orders", "quotes"]
