"""Job-layer coordinator running one bulk import batch with row-level isolation."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Mapping

from bulk_import.db import ImportRecordRepositoryPort, ImportRecordWriteRequest
from bulk_import.domain import (
    ImportAcceptedRecord,
    ImportResult,
    ImportRowError,
    domain_normalize_boolean,
    domain_normalize_currency,
    domain_normalize_date,
    domain_normalize_text,
)
from bulk_import.mapping import (
    FIELD_KIND_BOOLEAN,
    FIELD_KIND_CURRENCY,
    FIELD_KIND_DATE,
    FIELD_KIND_RELATION,
    FieldMapperPort,
    ImportMapping,
    RecordFieldDefinition,
    RecordTypeDefinition,
    ResolvedMapping,
    mapping_get_record_type,
)

from .interfaces import (
    CancellationCheck,
    EntityResolverPort,
    ImportAbortedError,
    ImportCancelledError,
    ImportTransactionState,
    RowValidationError,
)
from .natural_keys import NaturalKeySequence, job_reserve_batch_stamp_ms

logger = logging.getLogger(__name__)

# Exported order books end with a summary line keyed by this word.
_SUMMARY_ROW_MARKER = "total"


@dataclass(frozen=True)
class ImportTransactionConfig:
    """Configuration values for one import batch.

    Attributes:
        record_type: Target record type name.
        owner_id: Owning account identifier scoping every lookup and write.
        max_rows: Largest accepted batch size.
    """

    record_type: str
    owner_id: str
    max_rows: int = 5000


@dataclass
class _RowOutcome:
    natural_key: str
    contact_id: int | None
    values: dict[str, object]


class ImportTransaction:
    """Single-use coordinator for one import batch.

    Rows are processed strictly in source order on the calling thread. Each row's
    write is committed on its own, so rows accepted before a later failure stay
    committed. Only store unavailability aborts the batch.
    """

    def __init__(
        self,
        field_mapper: FieldMapperPort,
        entity_resolver: EntityResolverPort,
        record_repository: ImportRecordRepositoryPort,
        config: ImportTransactionConfig,
        cancellation_check: CancellationCheck | None = None,
    ):
        """Initialize import transaction dependencies.

        Args:
            field_mapper: Mapping-layer column resolver.
            entity_resolver: Job-layer contact find-or-create service.
            record_repository: DB-layer natural-key lookup and write service.
            config: Batch configuration.
            cancellation_check: Optional callable polled before each row.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies or config values are invalid.
        """

        if field_mapper is None:
            raise ValueError("field_mapper must not be None")
        if entity_resolver is None:
            raise ValueError("entity_resolver must not be None")
        if record_repository is None:
            raise ValueError("record_repository must not be None")
        if not config.owner_id.strip():
            raise ValueError("config.owner_id must not be blank")
        if config.max_rows < 1:
            raise ValueError("config.max_rows must be positive")

        self._record_type = mapping_get_record_type(config.record_type)
        self._field_mapper = field_mapper
        self._entity_resolver = entity_resolver
        self._record_repository = record_repository
        self._config = config
        self._owner_id = config.owner_id.strip()
        self._cancellation_check = cancellation_check
        self._state = ImportTransactionState.PENDING
        self._key_sequence: NaturalKeySequence | None = None

    @property
    def state(self) -> ImportTransactionState:
        """Return the current lifecycle state."""

        return self._state

    def job_import_run(
        self,
        rows: list[Mapping[str, str]],
        import_mapping: ImportMapping,
        available_headers: list[str] | None = None,
    ) -> ImportResult:
        """Import one batch of rows and return its result summary.

        Args:
            rows: Source rows keyed by file header, in file order.
            import_mapping: Caller mapping for the batch.
            available_headers: File header set; defaults to the union of row keys.

        Returns:
            ImportResult: Counts, row errors, accepted records and summary message.

        Raises:
            ValueError: Raised when the batch exceeds the row limit or targets another record type.
            MissingRequiredFieldError: Raised when a required field has no column; no rows are processed.
            ImportAbortedError: Raised when the store becomes unavailable mid-batch.
            ImportCancelledError: Raised when the cancellation check fires between rows.
            RuntimeError: Raised when the transaction was already used.
        """

        if self._state is not ImportTransactionState.PENDING:
            raise RuntimeError(f"import transaction already {self._state.value}")
        if len(rows) > self._config.max_rows:
            raise ValueError(f"import batch has {len(rows)} rows; limit is {self._config.max_rows}")
        if import_mapping.record_type != self._record_type.name:
            raise ValueError(
                f"mapping record_type={import_mapping.record_type} does not match import record_type={self._record_type.name}"
            )

        headers = available_headers if available_headers is not None else _job_collect_headers(rows)
        resolved_mapping = self._field_mapper.mapping_resolve(import_mapping, headers)
        display_names = {field_mapping.field_name: field_mapping.display_name for field_mapping in import_mapping.fields}

        logger.info(
            "Starting %s import for owner %s with %s rows", self._record_type.name, self._owner_id, len(rows)
        )
        self._state = ImportTransactionState.RUNNING
        if self._record_type.key_prefix is not None:
            self._key_sequence = NaturalKeySequence(self._record_type.key_prefix, job_reserve_batch_stamp_ms())

        errors: list[ImportRowError] = []
        accepted: list[ImportAcceptedRecord] = []
        skipped_count = 0

        for index, row in enumerate(rows):
            row_number = index + 1
            if self._cancellation_check is not None and self._cancellation_check():
                self._state = ImportTransactionState.CANCELLED
                logger.warning(
                    "Cancelled %s import before row %s after %s accepted rows",
                    self._record_type.name,
                    row_number,
                    len(accepted),
                )
                raise ImportCancelledError(f"import cancelled before row {row_number}")

            raw_values = resolved_mapping.resolved_mapping_extract(row)
            if self._job_row_is_skippable(row, raw_values):
                skipped_count += 1
                continue

            try:
                accepted.append(
                    self._job_import_row(
                        row_number=row_number,
                        raw_values=raw_values,
                        resolved_mapping=resolved_mapping,
                        display_names=display_names,
                    )
                )
            except ConnectionError as error:
                self._state = ImportTransactionState.ABORTED
                logger.error("Aborted %s import at row %s: %s", self._record_type.name, row_number, error)
                raise ImportAbortedError(f"import aborted at row {row_number}: {error}") from error
            except Exception as error:
                logger.warning("Rejected %s row %s: %s", self._record_type.name, row_number, error)
                errors.append(ImportRowError(row=row_number, message=str(error)))

        self._state = ImportTransactionState.COMPLETED
        message = job_build_import_summary(
            record_type=self._record_type,
            success_count=len(accepted),
            error_count=len(errors),
            skipped_count=skipped_count,
        )
        logger.info("%s", message)
        return ImportResult(
            record_type=self._record_type.name,
            success_count=len(accepted),
            error_count=len(errors),
            skipped_count=skipped_count,
            errors=tuple(errors),
            success_details=tuple(accepted),
            message=message,
        )

    def _job_import_row(
        self,
        row_number: int,
        raw_values: dict[str, str],
        resolved_mapping: ResolvedMapping,
        display_names: dict[str, str],
    ) -> ImportAcceptedRecord:
        """Normalize, relate and upsert one row.

        Args:
            row_number: 1-based source row index.
            raw_values: Raw text per canonical field.
            resolved_mapping: Batch column lookup table.
            display_names: Display name per canonical field.

        Returns:
            ImportAcceptedRecord: Accepted record detail.

        Raises:
            RowValidationError: Raised when a required value is missing or malformed.
            RelationResolutionError: Raised when the related contact cannot be resolved.
            PersistenceError: Raised when the write fails for data reasons.
            StoreUnavailableError: Raised when the store is unreachable.
        """

        outcome = self._job_normalize_row(raw_values, resolved_mapping, display_names)

        relation_values: dict[str, object] = {}
        for relation_field in self._record_type.record_type_relation_fields():
            relation_name = outcome.values.pop(relation_field.name, None)
            relation_values[relation_field.name] = relation_name
            contact_id = self._entity_resolver.job_resolve_contact(relation_name, self._owner_id)
            if contact_id is not None:
                outcome.contact_id = contact_id

        if not outcome.natural_key and self._key_sequence is not None:
            outcome.natural_key = self._key_sequence.job_next_key()

        request = ImportRecordWriteRequest(
            record_type=self._record_type.name,
            owner_id=self._owner_id,
            natural_key=outcome.natural_key,
            contact_id=outcome.contact_id,
            values=outcome.values,
        )
        existing = self._record_repository.db_import_record_find_by_natural_key(
            record_type=self._record_type.name,
            owner_id=self._owner_id,
            natural_key=outcome.natural_key,
        )
        if existing is None:
            reference = self._record_repository.db_import_record_insert(request)
        else:
            reference = self._record_repository.db_import_record_update(existing.record_id, request)

        detail_values: dict[str, object] = {self._record_type.natural_key_field: outcome.natural_key}
        detail_values.update(relation_values)
        detail_values.update(outcome.values)
        return ImportAcceptedRecord(
            row=row_number,
            record_id=reference.record_id,
            natural_key=reference.natural_key,
            updated=existing is not None,
            contact_id=outcome.contact_id,
            values=detail_values,
        )

    def _job_normalize_row(
        self,
        raw_values: dict[str, str],
        resolved_mapping: ResolvedMapping,
        display_names: dict[str, str],
    ) -> _RowOutcome:
        """Normalize every canonical field of one row.

        Args:
            raw_values: Raw text per canonical field.
            resolved_mapping: Batch column lookup table.
            display_names: Display name per canonical field.

        Returns:
            _RowOutcome: Natural key (possibly empty) and typed values without the key.

        Raises:
            RowValidationError: Raised when a required value is missing or malformed.
        """

        values: dict[str, object] = {}
        natural_key = ""
        for field_definition in self._record_type.fields:
            raw_text = raw_values.get(field_definition.name, "")
            display_name = display_names.get(field_definition.name, field_definition.display_name)
            required = field_definition.name in resolved_mapping.required_fields

            if field_definition.name == self._record_type.natural_key_field:
                natural_key = domain_normalize_text(raw_text) or ""
                if not natural_key and (required or self._record_type.natural_key_required):
                    raise RowValidationError(f"{display_name} is required")
                continue

            values[field_definition.name] = _job_normalize_value(field_definition, raw_text, display_name, required)

        return _RowOutcome(natural_key=natural_key, contact_id=None, values=values)

    def _job_row_is_skippable(self, row: Mapping[str, str], raw_values: dict[str, str]) -> bool:
        if all(domain_normalize_text(cell) is None for cell in row.values()):
            return True
        key_text = raw_values.get(self._record_type.natural_key_field, "")
        return key_text.strip().lower() == _SUMMARY_ROW_MARKER


def _job_normalize_value(
    field_definition: RecordFieldDefinition,
    raw_text: str,
    display_name: str,
    required: bool,
) -> object:
    """Normalize one non-key cell according to its field kind.

    Args:
        field_definition: Catalogue definition of the field.
        raw_text: Raw cell text.
        display_name: Field label for error messages.
        required: Whether the caller marked the field required.

    Returns:
        object: Typed value, default, or None.

    Raises:
        RowValidationError: Raised when a required text or date value is missing or malformed.
    """

    if field_definition.kind == FIELD_KIND_CURRENCY:
        return domain_normalize_currency(raw_text)
    if field_definition.kind == FIELD_KIND_BOOLEAN:
        return domain_normalize_boolean(raw_text)

    if field_definition.kind == FIELD_KIND_DATE:
        parsed_date = domain_normalize_date(raw_text)
        if parsed_date is None and required:
            if domain_normalize_text(raw_text) is None:
                raise RowValidationError(f"{display_name} is required")
            raise RowValidationError(f"{display_name} is not a valid date: '{raw_text.strip()}'")
        return parsed_date

    text_value = domain_normalize_text(raw_text)
    if text_value is None:
        if required:
            raise RowValidationError(f"{display_name} is required")
        if field_definition.kind == FIELD_KIND_RELATION:
            return None
        return field_definition.default
    if field_definition.value_aliases:
        return field_definition.value_aliases.get(text_value.lower(), text_value)
    return text_value


def _job_collect_headers(rows: list[Mapping[str, str]]) -> list[str]:
    headers: dict[str, None] = {}
    for row in rows:
        for header in row:
            headers.setdefault(header, None)
    return list(headers)


def job_build_import_summary(
    record_type: RecordTypeDefinition,
    success_count: int,
    error_count: int,
    skipped_count: int,
) -> str:
    """Build the human summary message for one finished batch.

    Args:
        record_type: Catalogue definition supplying record labels.
        success_count: Number of accepted rows.
        error_count: Number of rejected rows.
        skipped_count: Number of skipped rows.

    Returns:
        str: Message such as `Successfully imported 8 quotes with 2 errors.`

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    label = record_type.singular_label if success_count == 1 else record_type.plural_label
    message = f"Successfully imported {success_count} {label}"
    if error_count:
        message += f" with {error_count} {'error' if error_count == 1 else 'errors'}"
    if skipped_count:
        message += f" ({skipped_count} skipped)"
    return message + "."
