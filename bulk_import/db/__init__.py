"""Database layer package for all SQL and persistence boundaries."""

from .contact_persistence import SQLAlchemyContactPersistenceService
from .health import HEALTH_STATUS_READY, HEALTH_STATUS_UNMIGRATED, SQLAlchemyDatabaseHealthService
from .import_record_persistence import (
	IMPORT_TABLE_DEFINITIONS,
	ImportTableDefinition,
	SQLAlchemyImportRecordPersistenceService,
)
from .interfaces import (
	ContactRecord,
	ContactRepositoryPort,
	DatabaseHealthPort,
	ImportRecordReference,
	ImportRecordRepositoryPort,
	ImportRecordWriteRequest,
	PersistenceError,
	StoreUnavailableError,
)
from .session import db_create_engine, db_translate_error

__all__ = [
	"HEALTH_STATUS_READY",
	"HEALTH_STATUS_UNMIGRATED",
	"ContactRecord",
	"ContactRepositoryPort",
	"DatabaseHealthPort",
	"ImportRecordReference",
	"ImportRecordRepositoryPort",
	"ImportRecordWriteRequest",
	"PersistenceError",
	"StoreUnavailableError",
	"IMPORT_TABLE_DEFINITIONS",
	"ImportTableDefinition",
	"SQLAlchemyContactPersistenceService",
	"SQLAlchemyDatabaseHealthService",
	"SQLAlchemyImportRecordPersistenceService",
	"db_create_engine",
	"db_translate_error",
]
