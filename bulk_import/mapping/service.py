"""Field mapper resolving canonical import fields to actual file columns."""

from __future__ import annotations

import logging

from .interfaces import (
    UNMAPPED_COLUMN_SENTINEL,
    FieldMapperPort,
    ImportFieldMapping,
    ImportMapping,
    MissingRequiredFieldError,
    ResolvedMapping,
)

logger = logging.getLogger(__name__)


class FieldMapper(FieldMapperPort):
    """Concrete mapper computing one ResolvedMapping per import batch.

    An explicit primary column always wins when the file contains it, even if an
    alternative name would match a different column. Alternative names are
    compared case-insensitively after trimming, in declared order.
    """

    def mapping_resolve(self, import_mapping: ImportMapping, available_headers: list[str]) -> ResolvedMapping:
        """Resolve canonical fields to actual source columns.

        Args:
            import_mapping: Caller mapping for the batch.
            available_headers: Header names present in the source file.

        Returns:
            ResolvedMapping: Lookup table for per-row extraction.

        Raises:
            MissingRequiredFieldError: Raised when a required field has no matching column.
        """

        headers = [header for header in available_headers if isinstance(header, str)]
        header_set = set(headers)
        headers_by_normalized_name: dict[str, str] = {}
        for header in headers:
            headers_by_normalized_name.setdefault(header.strip().lower(), header)

        columns_by_field: dict[str, str] = {}
        missing_required: list[ImportFieldMapping] = []
        for field_mapping in import_mapping.fields:
            column_name = self._mapping_resolve_field(
                field_mapping=field_mapping,
                header_set=header_set,
                headers_by_normalized_name=headers_by_normalized_name,
            )
            if column_name is not None:
                columns_by_field[field_mapping.field_name] = column_name
                continue
            if field_mapping.required:
                missing_required.append(field_mapping)

        if missing_required:
            error = MissingRequiredFieldError(
                missing_fields=tuple(field_mapping.field_name for field_mapping in missing_required),
                missing_display_names=tuple(field_mapping.display_name for field_mapping in missing_required),
            )
            logger.warning("Import mapping rejected for %s: %s", import_mapping.record_type, error)
            raise error

        logger.debug("Resolved %s columns for %s: %s", len(columns_by_field), import_mapping.record_type, columns_by_field)
        return ResolvedMapping(
            record_type=import_mapping.record_type,
            field_names=tuple(field_mapping.field_name for field_mapping in import_mapping.fields),
            columns_by_field=columns_by_field,
            required_fields=frozenset(
                field_mapping.field_name for field_mapping in import_mapping.fields if field_mapping.required
            ),
        )

    def _mapping_resolve_field(
        self,
        field_mapping: ImportFieldMapping,
        header_set: set[str],
        headers_by_normalized_name: dict[str, str],
    ) -> str | None:
        """Resolve one canonical field against the file headers.

        Args:
            field_mapping: Mapping entry for the field.
            header_set: Exact header names in the file.
            headers_by_normalized_name: First header per trimmed lowercase name.

        Returns:
            str | None: Actual header name, or None when nothing matches.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        primary_column = field_mapping.primary_column
        if primary_column and primary_column != UNMAPPED_COLUMN_SENTINEL and primary_column in header_set:
            return primary_column

        for alternative_name in field_mapping.alternative_names:
            matched_header = headers_by_normalized_name.get(alternative_name.strip().lower())
            if matched_header is not None:
                return matched_header
        return None
