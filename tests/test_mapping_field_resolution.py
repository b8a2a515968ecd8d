"""Tests for canonical field to source column resolution."""

from __future__ import annotations

import pytest

from bulk_import.mapping import (
    FieldMapper,
    ImportFieldMapping,
    ImportMapping,
    MissingRequiredFieldError,
    RecordTypeDefinition,
    UNMAPPED_COLUMN_SENTINEL,
    UnknownRecordTypeError,
    mapping_build_import_mapping,
    mapping_get_record_type,
)


def _build_mapping(*fields: ImportFieldMapping) -> ImportMapping:
    return ImportMapping(record_type="quotes", fields=fields)


def test_mapping_resolve_prefers_primary_column_over_alternative_match() -> None:
    """Use the declared primary column even when an alternative names another column.

    Returns:
        None: Assertions validate primary-wins tie-break.

    Raises:
        AssertionError: Raised when the alternative column wins.
    """

    import_mapping = _build_mapping(
        ImportFieldMapping(
            field_name="total",
            display_name="Total",
            primary_column="Grand Total",
            alternative_names=("Total",),
        )
    )

    resolved = FieldMapper().mapping_resolve(import_mapping, ["Total", "Grand Total"])

    assert resolved.columns_by_field == {"total": "Grand Total"}


def test_mapping_resolve_matches_alternatives_case_insensitively_in_declared_order() -> None:
    """Accept the first alternative name found, ignoring case and padding."""

    import_mapping = _build_mapping(
        ImportFieldMapping(
            field_name="quote_number",
            display_name="Quote Number",
            alternative_names=("Quote #", "quote number"),
        )
    )

    resolved = FieldMapper().mapping_resolve(import_mapping, [" QUOTE NUMBER ", "quote #"])

    assert resolved.columns_by_field == {"quote_number": "quote #"}


def test_mapping_resolve_primary_column_match_is_case_sensitive() -> None:
    """Fall back to alternatives when the primary column differs in case from the file header."""

    import_mapping = _build_mapping(
        ImportFieldMapping(
            field_name="notes",
            display_name="Notes",
            primary_column="notes",
            alternative_names=("Comments",),
        )
    )

    resolved = FieldMapper().mapping_resolve(import_mapping, ["Notes", "Comments"])

    assert resolved.columns_by_field == {"notes": "Comments"}


def test_mapping_resolve_treats_unmapped_sentinel_as_absent_primary() -> None:
    """Ignore the UI sentinel for an unmapped primary column."""

    import_mapping = _build_mapping(
        ImportFieldMapping(
            field_name="notes",
            display_name="Notes",
            primary_column=UNMAPPED_COLUMN_SENTINEL,
            alternative_names=("Notes",),
        )
    )

    resolved = FieldMapper().mapping_resolve(import_mapping, [UNMAPPED_COLUMN_SENTINEL, "Notes"])

    assert resolved.columns_by_field == {"notes": "Notes"}


def test_mapping_resolve_rejects_missing_required_fields() -> None:
    """Reject the whole mapping when a required field has no matching column.

    Returns:
        None: Assertions validate missing-field rejection.

    Raises:
        AssertionError: Raised when resolution succeeds or reports wrong fields.
    """

    import_mapping = _build_mapping(
        ImportFieldMapping("quote_number", "Quote Number", alternative_names=("Quote #",), required=True),
        ImportFieldMapping("event_date", "Event Date", alternative_names=("Date",), required=True),
        ImportFieldMapping("notes", "Notes", alternative_names=("Notes",)),
    )

    with pytest.raises(MissingRequiredFieldError) as error_info:
        FieldMapper().mapping_resolve(import_mapping, ["Notes", "Customer"])

    assert error_info.value.missing_fields == ("quote_number", "event_date")
    assert "Quote Number" in str(error_info.value)
    assert "Event Date" in str(error_info.value)


def test_mapping_resolve_leaves_unmatched_optional_fields_absent() -> None:
    """Omit optional fields without a column and extract them as empty text."""

    import_mapping = _build_mapping(
        ImportFieldMapping("quote_number", "Quote Number", alternative_names=("Quote #",), required=True),
        ImportFieldMapping("notes", "Notes", alternative_names=("Notes",)),
    )

    resolved = FieldMapper().mapping_resolve(import_mapping, ["Quote #"])

    assert "notes" not in resolved.columns_by_field
    assert resolved.resolved_mapping_extract({"Quote #": "Q-1", "Other": "x"}) == {"quote_number": "Q-1", "notes": ""}


def test_mapping_build_import_mapping_puts_caller_alternatives_first() -> None:
    """Merge caller alternatives ahead of catalogue defaults without duplicates."""

    record_type = mapping_get_record_type("quotes")
    import_mapping = mapping_build_import_mapping(
        record_type,
        {
            "quote_number": ImportFieldMapping(
                field_name="quote_number",
                display_name="",
                alternative_names=("Ref", "quote number"),
                required=True,
            )
        },
    )

    quote_number_mapping = import_mapping.import_mapping_field("quote_number")
    assert quote_number_mapping is not None
    assert quote_number_mapping.alternative_names[:2] == ("Ref", "quote number")
    assert "Quote Number" not in quote_number_mapping.alternative_names
    assert quote_number_mapping.display_name == "Quote Number"
    assert quote_number_mapping.required is True
    assert import_mapping.import_mapping_field("notes").required is False


def test_mapping_build_import_mapping_rejects_unknown_fields() -> None:
    """Reject caller mappings for fields the record type does not define."""

    with pytest.raises(ValueError, match="unknown fields"):
        mapping_build_import_mapping(
            mapping_get_record_type("orders"),
            {"colour": ImportFieldMapping(field_name="colour", display_name="Colour")},
        )


def test_mapping_get_record_type_rejects_unknown_names() -> None:
    """Reject record types absent from the catalogue."""

    assert mapping_get_record_type(" Orders ").name == "orders"
    with pytest.raises(UnknownRecordTypeError):
        mapping_get_record_type("invoices")


def test_mapping_catalogue_sets_key_prefix_only_where_keys_are_synthesized() -> None:
    """Give a key prefix only to record types that accept rows without a key.

    Returns:
        None: Assertions validate catalogue key configuration.

    Raises:
        AssertionError: Raised when a prefix is missing or unreachable.
    """

    assert mapping_get_record_type("orders").key_prefix == "ORD"
    for record_type in ("quotes", "contacts", "ingredients"):
        definition = mapping_get_record_type(record_type)
        assert definition.natural_key_required is True
        assert definition.key_prefix is None

    with pytest.raises(ValueError, match="needs a key_prefix"):
        RecordTypeDefinition(
            name="invoices",
            singular_label="invoice",
            plural_label="invoices",
            natural_key_field="invoice_number",
            natural_key_required=False,
            fields=(),
        )
