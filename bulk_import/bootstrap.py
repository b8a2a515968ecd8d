"""Application bootstrap wiring for startup validation and dependency assembly."""

from fastapi import FastAPI
from sqlalchemy import Engine

from bulk_import.api import create_api_application
from bulk_import.config import AppSettings, config_configure_logging, config_load_settings
from bulk_import.db import (
    SQLAlchemyContactPersistenceService,
    SQLAlchemyDatabaseHealthService,
    SQLAlchemyImportRecordPersistenceService,
    db_create_engine,
)
from bulk_import.jobs import CancellationCheck, EntityResolver, ImportTransaction, ImportTransactionConfig
from bulk_import.mapping import FieldMapper


def bootstrap_load_settings() -> AppSettings:
    """Load settings and apply process-wide logging configuration.

    Returns:
        AppSettings: Validated runtime settings.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    settings = config_load_settings()
    config_configure_logging(settings.log_level)
    return settings


def bootstrap_create_application(settings: AppSettings | None = None) -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Args:
        settings: Optional preloaded settings.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or bootstrap_load_settings()
    engine = db_create_engine(database_url=resolved_settings.database_url)
    return create_api_application(
        settings=resolved_settings,
        db_health_service=SQLAlchemyDatabaseHealthService(engine=engine),
        field_mapper=FieldMapper(),
        entity_resolver=EntityResolver(contact_repository=SQLAlchemyContactPersistenceService(engine=engine)),
        record_repository=SQLAlchemyImportRecordPersistenceService(engine=engine),
    )


def bootstrap_create_import_transaction(
    record_type: str,
    owner_id: str,
    settings: AppSettings | None = None,
    engine: Engine | None = None,
    cancellation_check: CancellationCheck | None = None,
) -> ImportTransaction:
    """Build one import transaction for non-HTTP trigger surfaces.

    Args:
        record_type: Target record type name.
        owner_id: Owning account identifier.
        settings: Optional preloaded settings.
        engine: Optional engine override; defaults to one built from settings.
        cancellation_check: Optional callable polled before each row.

    Returns:
        ImportTransaction: Fully wired, unused import transaction.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
        UnknownRecordTypeError: Raised when the record type is not in the catalogue.
    """

    resolved_settings = settings or bootstrap_load_settings()
    resolved_engine = engine or db_create_engine(database_url=resolved_settings.database_url)
    return ImportTransaction(
        field_mapper=FieldMapper(),
        entity_resolver=EntityResolver(contact_repository=SQLAlchemyContactPersistenceService(engine=resolved_engine)),
        record_repository=SQLAlchemyImportRecordPersistenceService(engine=resolved_engine),
        config=ImportTransactionConfig(
            record_type=record_type,
            owner_id=owner_id,
            max_rows=resolved_settings.import_max_rows,
        ),
        cancellation_check=cancellation_check,
    )
