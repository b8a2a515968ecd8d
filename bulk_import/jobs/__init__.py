"""Job layer package for bulk import coordination."""

from .entity_resolver import EntityResolver
from .import_transaction import ImportTransaction, ImportTransactionConfig, job_build_import_summary
from .interfaces import (
	CancellationCheck,
	EntityResolverPort,
	ImportAbortedError,
	ImportCancelledError,
	ImportTransactionState,
	RelationResolutionError,
	RowValidationError,
)
from .natural_keys import NaturalKeySequence, job_reserve_batch_stamp_ms

__all__ = [
	"CancellationCheck",
	"EntityResolver",
	"EntityResolverPort",
	"ImportAbortedError",
	"ImportCancelledError",
	"ImportTransaction",
	"ImportTransactionConfig",
	"ImportTransactionState",
	"NaturalKeySequence",
	"RelationResolutionError",
	"RowValidationError",
	"job_build_import_summary",
	"job_reserve_batch_stamp_ms",
]
