"""Typed interfaces for mapping-layer column resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Protocol

FIELD_KIND_TEXT = "text"
FIELD_KIND_DATE = "date"
FIELD_KIND_CURRENCY = "currency"
FIELD_KIND_BOOLEAN = "boolean"
FIELD_KIND_RELATION = "relation"

# Primary column sentinel sent by mapping UIs for "not mapped".
UNMAPPED_COLUMN_SENTINEL = "_none_"


class MissingRequiredFieldError(ValueError):
    """Raised when required canonical fields have no matching source column.

    Attributes:
        missing_fields: Canonical names of the unresolved required fields.
        missing_display_names: Display names of the unresolved required fields.
    """

    def __init__(self, missing_fields: tuple[str, ...], missing_display_names: tuple[str, ...]):
        self.missing_fields = missing_fields
        self.missing_display_names = missing_display_names
        super().__init__(f"missing required columns: {', '.join(missing_display_names)}")


class UnknownRecordTypeError(ValueError):
    """Raised when an import targets a record type with no catalogue entry."""


@dataclass(frozen=True)
class ImportFieldMapping:
    """Caller mapping for one canonical field.

    Attributes:
        field_name: Canonical field name.
        display_name: Human-readable field label.
        primary_column: Explicitly chosen source column, if any.
        alternative_names: Ordered fallback column names.
        required: Whether the field must resolve to a source column.
    """

    field_name: str
    display_name: str
    primary_column: str | None = None
    alternative_names: tuple[str, ...] = ()
    required: bool = False


@dataclass(frozen=True)
class ImportMapping:
    """Ordered canonical-field mapping for one import batch.

    Attributes:
        record_type: Target record type name.
        fields: Field mappings in catalogue order.
    """

    record_type: str
    fields: tuple[ImportFieldMapping, ...]

    def import_mapping_field(self, field_name: str) -> ImportFieldMapping | None:
        """Return the mapping entry for one canonical field.

        Args:
            field_name: Canonical field name.

        Returns:
            ImportFieldMapping | None: Matching entry or None when absent.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        for field_mapping in self.fields:
            if field_mapping.field_name == field_name:
                return field_mapping
        return None


@dataclass(frozen=True)
class ResolvedMapping:
    """Canonical field to actual source column lookup table for one file.

    Attributes:
        record_type: Target record type name.
        field_names: All canonical field names of the batch mapping in order.
        columns_by_field: Resolved source column per canonical field.
        required_fields: Canonical fields the caller marked required.
    """

    record_type: str
    field_names: tuple[str, ...]
    columns_by_field: dict[str, str] = field(default_factory=dict)
    required_fields: frozenset[str] = frozenset()

    def resolved_mapping_extract(self, row: Mapping[str, object]) -> dict[str, str]:
        """Extract raw text for every canonical field from one source row.

        Args:
            row: Source row keyed by the file's own headers.

        Returns:
            dict[str, str]: Raw text per canonical field; unresolved or missing cells yield "".

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        extracted: dict[str, str] = {}
        for field_name in self.field_names:
            column_name = self.columns_by_field.get(field_name)
            if column_name is None:
                extracted[field_name] = ""
                continue
            cell_value = row.get(column_name)
            extracted[field_name] = "" if cell_value is None else str(cell_value)
        return extracted


class FieldMapperPort(Protocol):
    """Port definition for resolving canonical fields against file headers."""

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
