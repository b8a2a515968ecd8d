"""Catalogue of importable record types and their canonical fields."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Mapping

from .interfaces import (
    FIELD_KIND_BOOLEAN,
    FIELD_KIND_CURRENCY,
    FIELD_KIND_DATE,
    FIELD_KIND_RELATION,
    FIELD_KIND_TEXT,
    ImportFieldMapping,
    ImportMapping,
    UnknownRecordTypeError,
)


@dataclass(frozen=True)
class RecordFieldDefinition:
    """Catalogue definition of one canonical field.

    Attributes:
        name: Canonical field name.
        kind: Value kind driving normalization.
        display_name: Human-readable label.
        alternative_names: Default fallback column names, tried in order.
        default: Value used when the cell is blank.
        value_aliases: Case-insensitive replacements applied to non-blank text values.
    """

    name: str
    kind: str
    display_name: str
    alternative_names: tuple[str, ...] = ()
    default: str | None = None
    value_aliases: Mapping[str, str] | None = None


@dataclass(frozen=True)
class RecordTypeDefinition:
    """Catalogue definition of one importable record type.

    Attributes:
        name: Record type name used by callers.
        singular_label: Singular noun for summary messages.
        plural_label: Plural noun for summary messages.
        natural_key_field: Canonical field holding the business key.
        natural_key_required: Whether rows without a key are rejected instead of synthesized.
        fields: Canonical fields in display order.
        key_prefix: Prefix for synthesized business keys; None when keys are mandatory.
    """

    name: str
    singular_label: str
    plural_label: str
    natural_key_field: str
    natural_key_required: bool
    fields: tuple[RecordFieldDefinition, ...]
    key_prefix: str | None = None

    def __post_init__(self) -> None:
        if not self.natural_key_required and not (self.key_prefix or "").strip():
            raise ValueError(f"record_type={self.name} synthesizes keys and needs a key_prefix")

    def record_type_relation_fields(self) -> tuple[RecordFieldDefinition, ...]:
        """Return fields resolved through the related-contact lookup.

        Returns:
            tuple[RecordFieldDefinition, ...]: Relation fields in catalogue order.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        return tuple(field_definition for field_definition in self.fields if field_definition.kind == FIELD_KIND_RELATION)


# Status labels from exported order books mapped to this application's vocabulary.
STATUS_ALIASES: Final[dict[str, str]] = {
    "booked": "Confirmed",
    "confirmed": "Confirmed",
    "paid": "Paid",
    "delivered": "Delivered",
    "cancelled": "Cancelled",
    "canceled": "Cancelled",
    "draft": "Draft",
    "quote": "Quote",
}

_CONTACT_NAME_FIELD = RecordFieldDefinition(
    name="contact_name",
    kind=FIELD_KIND_RELATION,
    display_name="Contact Name",
    alternative_names=("Contact Name", "Contact", "Customer Name", "Customer", "Client", "Name"),
)

ORDER_RECORD_TYPE: Final[RecordTypeDefinition] = RecordTypeDefinition(
    name="orders",
    singular_label="order",
    plural_label="orders",
    natural_key_field="order_number",
    natural_key_required=False,
    fields=(
        RecordFieldDefinition("order_number", FIELD_KIND_TEXT, "Order Number", ("Order Number", "Order No", "Order #", "Order ID")),
        _CONTACT_NAME_FIELD,
        RecordFieldDefinition("event_date", FIELD_KIND_DATE, "Event Date", ("Event Date", "Date", "Delivery Date", "Due Date")),
        RecordFieldDefinition("event_type", FIELD_KIND_TEXT, "Event Type", ("Event Type", "Occasion", "Type"), default="Other"),
        RecordFieldDefinition("status", FIELD_KIND_TEXT, "Status", ("Status", "Order Status"), default="Draft", value_aliases=STATUS_ALIASES),
        RecordFieldDefinition("delivery_type", FIELD_KIND_TEXT, "Delivery Type", ("Delivery Type", "Delivery Option", "Collection"), default="Pickup"),
        RecordFieldDefinition("delivery_address", FIELD_KIND_TEXT, "Delivery Address", ("Delivery Address", "Address")),
        RecordFieldDefinition("delivery_cost", FIELD_KIND_CURRENCY, "Delivery Cost", ("Delivery Cost", "Delivery Amount", "Delivery Fee")),
        RecordFieldDefinition("total", FIELD_KIND_CURRENCY, "Total", ("Total", "Order Total", "Total Amount", "Amount")),
        RecordFieldDefinition("deposit_amount", FIELD_KIND_CURRENCY, "Deposit Amount", ("Deposit Amount", "Deposit")),
        RecordFieldDefinition("deposit_paid", FIELD_KIND_BOOLEAN, "Deposit Paid", ("Deposit Paid",)),
        RecordFieldDefinition("balance_paid", FIELD_KIND_BOOLEAN, "Balance Paid", ("Balance Paid", "Paid", "Paid In Full")),
        RecordFieldDefinition("notes", FIELD_KIND_TEXT, "Notes", ("Notes", "Note", "Comments")),
        RecordFieldDefinition("description", FIELD_KIND_TEXT, "Description", ("Description", "Details", "Theme")),
    ),
    key_prefix="ORD",
)

QUOTE_RECORD_TYPE: Final[RecordTypeDefinition] = RecordTypeDefinition(
    name="quotes",
    singular_label="quote",
    plural_label="quotes",
    natural_key_field="quote_number",
    natural_key_required=True,
    fields=(
        RecordFieldDefinition("quote_number", FIELD_KIND_TEXT, "Quote Number", ("Quote Number", "Quote No", "Quote #", "Quote ID")),
        _CONTACT_NAME_FIELD,
        RecordFieldDefinition("event_date", FIELD_KIND_DATE, "Event Date", ("Event Date", "Date")),
        RecordFieldDefinition("expiry_date", FIELD_KIND_DATE, "Expiry Date", ("Expiry Date", "Expires", "Valid Until")),
        RecordFieldDefinition("event_type", FIELD_KIND_TEXT, "Event Type", ("Event Type", "Occasion", "Type"), default="Other"),
        RecordFieldDefinition("status", FIELD_KIND_TEXT, "Status", ("Status", "Quote Status"), default="Draft", value_aliases=STATUS_ALIASES),
        RecordFieldDefinition("delivery_type", FIELD_KIND_TEXT, "Delivery Type", ("Delivery Type", "Delivery Option"), default="Pickup"),
        RecordFieldDefinition("total", FIELD_KIND_CURRENCY, "Total", ("Total", "Quote Total", "Total Amount", "Price", "Amount")),
        RecordFieldDefinition("description", FIELD_KIND_TEXT, "Description", ("Description", "Details", "Theme")),
        RecordFieldDefinition("notes", FIELD_KIND_TEXT, "Notes", ("Notes", "Note", "Comments")),
    ),
)

CONTACT_RECORD_TYPE: Final[RecordTypeDefinition] = RecordTypeDefinition(
    name="contacts",
    singular_label="contact",
    plural_label="contacts",
    natural_key_field="name",
    natural_key_required=True,
    fields=(
        RecordFieldDefinition("name", FIELD_KIND_TEXT, "Name", ("Name", "Full Name", "Contact Name", "Customer Name")),
        RecordFieldDefinition("email", FIELD_KIND_TEXT, "Email", ("Email", "Email Address", "E-mail")),
        RecordFieldDefinition("phone", FIELD_KIND_TEXT, "Phone", ("Phone", "Phone Number", "Mobile", "Telephone")),
        RecordFieldDefinition("company", FIELD_KIND_TEXT, "Company", ("Company", "Business Name", "Organisation", "Organization")),
        RecordFieldDefinition("address", FIELD_KIND_TEXT, "Address", ("Address", "Street Address")),
        RecordFieldDefinition("notes", FIELD_KIND_TEXT, "Notes", ("Notes", "Note", "Comments")),
    ),
)

INGREDIENT_RECORD_TYPE: Final[RecordTypeDefinition] = RecordTypeDefinition(
    name="ingredients",
    singular_label="ingredient",
    plural_label="ingredients",
    natural_key_field="name",
    natural_key_required=True,
    fields=(
        RecordFieldDefinition("name", FIELD_KIND_TEXT, "Name", ("Name", "Ingredient", "Ingredient Name", "Item")),
        RecordFieldDefinition("unit", FIELD_KIND_TEXT, "Unit", ("Unit", "Units", "Unit Of Measure", "UOM")),
        RecordFieldDefinition("supplier", FIELD_KIND_TEXT, "Supplier", ("Supplier", "Vendor", "Brand")),
        RecordFieldDefinition("category", FIELD_KIND_TEXT, "Category", ("Category", "Group"), default="General"),
        RecordFieldDefinition("unit_cost", FIELD_KIND_CURRENCY, "Unit Cost", ("Unit Cost", "Cost Per Unit", "Price Per Unit")),
        RecordFieldDefinition("pack_size", FIELD_KIND_CURRENCY, "Pack Size", ("Pack Size", "Size", "Quantity")),
        RecordFieldDefinition("pack_cost", FIELD_KIND_CURRENCY, "Pack Cost", ("Pack Cost", "Pack Price", "Cost", "Price")),
    ),
)

RECORD_TYPE_DEFINITIONS: Final[dict[str, RecordTypeDefinition]] = {
    definition.name: definition
    for definition in (ORDER_RECORD_TYPE, QUOTE_RECORD_TYPE, CONTACT_RECORD_TYPE, INGREDIENT_RECORD_TYPE)
}


def mapping_get_record_type(record_type: str) -> RecordTypeDefinition:
    """Look up one record type definition by name.

    Args:
        record_type: Record type name, for example `orders`.

    Returns:
        RecordTypeDefinition: Catalogue definition.

    Raises:
        UnknownRecordTypeError: Raised when the name is not in the catalogue.
    """

    normalized_record_type = record_type.strip().lower()
    definition = RECORD_TYPE_DEFINITIONS.get(normalized_record_type)
    if definition is None:
        raise UnknownRecordTypeError(f"unsupported record_type={record_type}")
    return definition


def mapping_build_import_mapping(
    record_type: RecordTypeDefinition,
    requested_fields: dict[str, ImportFieldMapping] | None = None,
) -> ImportMapping:
    """Merge caller field mappings with catalogue defaults.

    Caller alternative names are tried before catalogue alternatives, and caller
    display names replace catalogue labels. Fields the caller does not mention
    keep catalogue alternatives and are optional.

    Args:
        record_type: Catalogue definition of the target record type.
        requested_fields: Caller mappings keyed by canonical field name.

    Returns:
        ImportMapping: Ordered mapping for the whole batch.

    Raises:
        ValueError: Raised when the caller names a field unknown to the record type.
    """

    requested = requested_fields or {}
    unknown_field_names = sorted(set(requested) - {field_definition.name for field_definition in record_type.fields})
    if unknown_field_names:
        raise ValueError(f"unknown fields for record_type={record_type.name}: {', '.join(unknown_field_names)}")

    field_mappings: list[ImportFieldMapping] = []
    for field_definition in record_type.fields:
        requested_mapping = requested.get(field_definition.name)
        if requested_mapping is None:
            field_mappings.append(
                ImportFieldMapping(
                    field_name=field_definition.name,
                    display_name=field_definition.display_name,
                    alternative_names=field_definition.alternative_names,
                )
            )
            continue

        field_mappings.append(
            ImportFieldMapping(
                field_name=field_definition.name,
                display_name=(requested_mapping.display_name or "").strip() or field_definition.display_name,
                primary_column=requested_mapping.primary_column,
                alternative_names=_mapping_merge_alternative_names(
                    requested_mapping.alternative_names,
                    field_definition.alternative_names,
                ),
                required=requested_mapping.required,
            )
        )

    return ImportMapping(record_type=record_type.name, fields=tuple(field_mappings))


def _mapping_merge_alternative_names(*name_groups: tuple[str, ...]) -> tuple[str, ...]:
    """Concatenate alternative names, dropping case-insensitive duplicates.

    Args:
        name_groups: Ordered alternative name groups.

    Returns:
        tuple[str, ...]: Ordered unique alternative names.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    seen_names: set[str] = set()
    merged_names: list[str] = []
    for name_group in name_groups:
        for name in name_group:
            normalized_name = name.strip().lower()
            if not normalized_name or normalized_name in seen_names:
                continue
            seen_names.add(normalized_name)
            merged_names.append(name)
    return tuple(merged_names)
