"""Mapping layer package for canonical field to source column resolution."""

from .interfaces import (
	FIELD_KIND_BOOLEAN,
	FIELD_KIND_CURRENCY,
	FIELD_KIND_DATE,
	FIELD_KIND_RELATION,
	FIELD_KIND_TEXT,
	UNMAPPED_COLUMN_SENTINEL,
	FieldMapperPort,
	ImportFieldMapping,
	ImportMapping,
	MissingRequiredFieldError,
	ResolvedMapping,
	UnknownRecordTypeError,
)
from .record_types import (
	RECORD_TYPE_DEFINITIONS,
	STATUS_ALIASES,
	RecordFieldDefinition,
	RecordTypeDefinition,
	mapping_build_import_mapping,
	mapping_get_record_type,
)
from .service import FieldMapper

__all__ = [
	"FIELD_KIND_BOOLEAN",
	"FIELD_KIND_CURRENCY",
	"FIELD_KIND_DATE",
	"FIELD_KIND_RELATION",
	"FIELD_KIND_TEXT",
	"UNMAPPED_COLUMN_SENTINEL",
	"FieldMapper",
	"FieldMapperPort",
	"ImportFieldMapping",
	"ImportMapping",
	"MissingRequiredFieldError",
	"ResolvedMapping",
	"UnknownRecordTypeError",
	"RECORD_TYPE_DEFINITIONS",
	"STATUS_ALIASES",
	"RecordFieldDefinition",
	"RecordTypeDefinition",
	"mapping_build_import_mapping",
	"mapping_get_record_type",
]
