"""Database service for natural-key lookup and atomic writes of imported records.

Table and column names come only from the static catalogue in this module; every
value, including the natural key and owner scope, is a bound parameter.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import Boolean, Date, Engine, Integer, Numeric, String, bindparam, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.types import TypeEngine

from bulk_import.db.interfaces import (
    ImportRecordReference,
    ImportRecordRepositoryPort,
    ImportRecordWriteRequest,
    PersistenceError,
)
from bulk_import.db.session import db_translate_error

_TEXT = String()
_DATE = Date()
_MONEY = Numeric(12, 2)
_FLAG = Boolean()


@dataclass(frozen=True)
class ImportTableDefinition:
    """Static storage layout for one importable record type.

    Attributes:
        table_name: Target table.
        id_column: Primary key column.
        natural_key_column: Column holding the business key.
        natural_key_case_insensitive: Whether key lookups ignore case.
        has_contact: Whether the table carries a `contact_id` relation.
        value_columns: Canonical field name to bind type; column names equal field names.
    """

    table_name: str
    id_column: str
    natural_key_column: str
    natural_key_case_insensitive: bool
    has_contact: bool
    value_columns: dict[str, TypeEngine]


IMPORT_TABLE_DEFINITIONS: dict[str, ImportTableDefinition] = {
    "orders": ImportTableDefinition(
        table_name="orders",
        id_column="order_id",
        natural_key_column="order_number",
        natural_key_case_insensitive=False,
        has_contact=True,
        value_columns={
            "event_date": _DATE,
            "event_type": _TEXT,
            "status": _TEXT,
            "delivery_type": _TEXT,
            "delivery_address": _TEXT,
            "delivery_cost": _MONEY,
            "total": _MONEY,
            "deposit_amount": _MONEY,
            "deposit_paid": _FLAG,
            "balance_paid": _FLAG,
            "notes": _TEXT,
            "description": _TEXT,
        },
    ),
    "quotes": ImportTableDefinition(
        table_name="quotes",
        id_column="quote_id",
        natural_key_column="quote_number",
        natural_key_case_insensitive=False,
        has_contact=True,
        value_columns={
            "event_date": _DATE,
            "expiry_date": _DATE,
            "event_type": _TEXT,
            "status": _TEXT,
            "delivery_type": _TEXT,
            "total": _MONEY,
            "description": _TEXT,
            "notes": _TEXT,
        },
    ),
    "contacts": ImportTableDefinition(
        table_name="contacts",
        id_column="contact_id",
        natural_key_column="display_name",
        natural_key_case_insensitive=True,
        has_contact=False,
        value_columns={
            "email": _TEXT,
            "phone": _TEXT,
            "company": _TEXT,
            "address": _TEXT,
            "notes": _TEXT,
        },
    ),
    "ingredients": ImportTableDefinition(
        table_name="ingredients",
        id_column="ingredient_id",
        natural_key_column="name",
        natural_key_case_insensitive=False,
        has_contact=False,
        value_columns={
            "unit": _TEXT,
            "supplier": _TEXT,
            "category": _TEXT,
            "unit_cost": _MONEY,
            "pack_size": _MONEY,
            "pack_cost": _MONEY,
        },
    ),
}


class SQLAlchemyImportRecordPersistenceService(ImportRecordRepositoryPort):
    """SQLAlchemy implementation of owner-scoped update-or-insert primitives.

    Each public call runs in its own transaction, so a written row is either
    fully committed or not visible at all.
    """

    def __init__(self, engine: Engine):
        """Initialize import record persistence service.

        Args:
            engine: SQLAlchemy engine used for all persistence operations.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when engine is invalid.
        """

        if engine is None:
            raise ValueError("engine must not be None")

        self._engine = engine

    def db_import_record_find_by_natural_key(
        self,
        record_type: str,
        owner_id: str,
        natural_key: str,
    ) -> ImportRecordReference | None:
        """Find one existing record by natural key within the owner scope.

        Args:
            record_type: Record type name.
            owner_id: Owning account identifier.
            natural_key: Business key.

        Returns:
            ImportRecordReference | None: Oldest matching record or None.

        Raises:
            ValueError: Raised when the record type is unsupported or inputs are blank.
            PersistenceError: Raised when the lookup fails.
            StoreUnavailableError: Raised when the store is unreachable.
        """

        table = _db_import_get_table(record_type)
        normalized_owner_id = _db_import_validate_non_empty_text(owner_id, "owner_id")
        normalized_natural_key = _db_import_validate_non_empty_text(natural_key, "natural_key")

        if table.natural_key_case_insensitive:
            key_predicate = f"LOWER({table.natural_key_column}) = LOWER(:natural_key)"
        else:
            key_predicate = f"{table.natural_key_column} = :natural_key"

        try:
            with self._engine.connect() as connection:
                row = connection.execute(
                    text(
                        f"SELECT {table.id_column} AS record_id, {table.natural_key_column} AS natural_key "
                        f"FROM {table.table_name} "
                        f"WHERE owner_id = :owner_id AND {key_predicate} "
                        f"ORDER BY {table.id_column} ASC LIMIT 1"
                    ),
                    {"owner_id": normalized_owner_id, "natural_key": normalized_natural_key},
                ).mappings().first()
        except SQLAlchemyError as error:
            raise db_translate_error(error, f"{record_type} lookup") from error

        if row is None:
            return None
        return ImportRecordReference(
            record_type=table.table_name,
            record_id=int(row["record_id"]),
            natural_key=row["natural_key"],
        )

    def db_import_record_insert(self, request: ImportRecordWriteRequest) -> ImportRecordReference:
        """Insert one record atomically.

        Args:
            request: Write request.

        Returns:
            ImportRecordReference: Inserted record identity.

        Raises:
            ValueError: Raised when the request is invalid.
            PersistenceError: Raised when the insert fails.
            StoreUnavailableError: Raised when the store is unreachable.
        """

        table, parameters = _db_import_build_parameters(request)
        column_names = ["owner_id", table.natural_key_column, *_db_import_write_columns(table)]
        bind_names = ["owner_id", "natural_key", *_db_import_write_columns(table)]
        statement = text(
            f"INSERT INTO {table.table_name} ({', '.join(column_names)}) "
            f"VALUES ({', '.join(':' + name for name in bind_names)}) "
            f"RETURNING {table.id_column} AS record_id, {table.natural_key_column} AS natural_key"
        ).bindparams(*_db_import_typed_bindparams(table))

        try:
            with self._engine.begin() as connection:
                row = connection.execute(statement, parameters).mappings().one()
        except SQLAlchemyError as error:
            raise db_translate_error(error, f"{request.record_type} insert") from error

        return ImportRecordReference(
            record_type=table.table_name,
            record_id=int(row["record_id"]),
            natural_key=row["natural_key"],
        )

    def db_import_record_update(self, record_id: int, request: ImportRecordWriteRequest) -> ImportRecordReference:
        """Update one existing record in place atomically.

        The stored natural key and primary key are preserved; every value column
        is overwritten with the request values.

        Args:
            record_id: Existing record primary key.
            request: Write request.

        Returns:
            ImportRecordReference: Updated record identity.

        Raises:
            ValueError: Raised when the request is invalid.
            PersistenceError: Raised when the update fails or the record no longer exists.
            StoreUnavailableError: Raised when the store is unreachable.
        """

        table, parameters = _db_import_build_parameters(request)
        parameters["record_id"] = record_id
        assignments = [f"{column_name} = :{column_name}" for column_name in _db_import_write_columns(table)]
        assignments.append("updated_at = CURRENT_TIMESTAMP")
        statement = text(
            f"UPDATE {table.table_name} SET {', '.join(assignments)} "
            f"WHERE {table.id_column} = :record_id AND owner_id = :owner_id "
            f"RETURNING {table.id_column} AS record_id, {table.natural_key_column} AS natural_key"
        ).bindparams(bindparam("record_id", type_=Integer()), *_db_import_typed_bindparams(table))

        try:
            with self._engine.begin() as connection:
                row = connection.execute(statement, parameters).mappings().first()
        except SQLAlchemyError as error:
            raise db_translate_error(error, f"{request.record_type} update") from error

        if row is None:
            raise PersistenceError(f"{request.record_type} update failed: record {record_id} not found")
        return ImportRecordReference(
            record_type=table.table_name,
            record_id=int(row["record_id"]),
            natural_key=row["natural_key"],
        )


def _db_import_get_table(record_type: str) -> ImportTableDefinition:
    """Return the storage layout for one record type.

    Args:
        record_type: Record type name.

    Returns:
        ImportTableDefinition: Static table definition.

    Raises:
        ValueError: Raised when the record type has no table.
    """

    table = IMPORT_TABLE_DEFINITIONS.get(record_type)
    if table is None:
        raise ValueError(f"unsupported record_type={record_type}")
    return table


def _db_import_write_columns(table: ImportTableDefinition) -> list[str]:
    columns = list(table.value_columns)
    if table.has_contact:
        columns.insert(0, "contact_id")
    return columns


def _db_import_typed_bindparams(table: ImportTableDefinition) -> list:
    typed = [bindparam(column_name, type_=column_type) for column_name, column_type in table.value_columns.items()]
    if table.has_contact:
        typed.append(bindparam("contact_id", type_=Integer()))
    return typed


def _db_import_build_parameters(request: ImportRecordWriteRequest) -> tuple[ImportTableDefinition, dict[str, object]]:
    """Validate one write request and build its bind parameters.

    Args:
        request: Write request.

    Returns:
        tuple[ImportTableDefinition, dict[str, object]]: Table definition and parameters.

    Raises:
        ValueError: Raised when the request names unknown columns or blank identities.
    """

    table = _db_import_get_table(request.record_type)
    unknown_columns = sorted(set(request.values) - set(table.value_columns))
    if unknown_columns:
        raise ValueError(f"unsupported columns for record_type={request.record_type}: {', '.join(unknown_columns)}")
    if request.contact_id is not None and not table.has_contact:
        raise ValueError(f"record_type={request.record_type} has no contact relation")

    parameters: dict[str, object] = {
        "owner_id": _db_import_validate_non_empty_text(request.owner_id, "owner_id"),
        "natural_key": _db_import_validate_non_empty_text(request.natural_key, "natural_key"),
    }
    for column_name in table.value_columns:
        parameters[column_name] = request.values.get(column_name)
    if table.has_contact:
        parameters["contact_id"] = request.contact_id
    return table, parameters


def _db_import_validate_non_empty_text(value: str, field_name: str) -> str:
    normalized_value = (value or "").strip()
    if not normalized_value:
        raise ValueError(f"{field_name} must not be blank")
    return normalized_value
