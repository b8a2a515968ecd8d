"""FastAPI application factory for the bulk import service."""

from fastapi import FastAPI

from bulk_import.config import AppSettings
from bulk_import.db import DatabaseHealthPort, ImportRecordRepositoryPort
from bulk_import.jobs import EntityResolverPort
from bulk_import.mapping import RECORD_TYPE_DEFINITIONS, FieldMapperPort

from .routers import api_create_health_router, api_create_imports_router


def create_api_application(
    settings: AppSettings,
    db_health_service: DatabaseHealthPort,
    field_mapper: FieldMapperPort,
    entity_resolver: EntityResolverPort,
    record_repository: ImportRecordRepositoryPort,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings.
        db_health_service: Database health service used by health endpoints.
        field_mapper: Mapping-layer column resolver.
        entity_resolver: Job-layer contact find-or-create service.
        record_repository: DB-layer import record repository.

    Returns:
        FastAPI: Framework application instance with all routers attached.

    Raises:
        ValueError: Raised when router dependencies are invalid.
    """
    application = FastAPI(title="Bulk Import Pipeline")

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, object]:
        """Return service identity and the importable record types."""

        return {
            "service": "bulk-import-pipeline",
            "environment": settings.environment_name,
            "record_types": sorted(RECORD_TYPE_DEFINITIONS),
        }

    application.include_router(api_create_health_router(db_health_service=db_health_service))
    application.include_router(
        api_create_imports_router(
            settings=settings,
            field_mapper=field_mapper,
            entity_resolver=entity_resolver,
            record_repository=record_repository,
        )
    )

    return application
