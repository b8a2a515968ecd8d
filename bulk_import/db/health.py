"""Import store readiness checks used by the `/health` endpoint."""

from sqlalchemy import Engine, inspect
from sqlalchemy.exc import SQLAlchemyError

from bulk_import.domain import HealthStatus

from .import_record_persistence import IMPORT_TABLE_DEFINITIONS
from .interfaces import DatabaseHealthPort

HEALTH_STATUS_READY = "ok"
HEALTH_STATUS_UNMIGRATED = "unmigrated"


def _db_required_table_names() -> tuple[str, ...]:
    table_names = {"contacts"}
    table_names.update(table.table_name for table in IMPORT_TABLE_DEFINITIONS.values())
    return tuple(sorted(table_names))


class SQLAlchemyDatabaseHealthService(DatabaseHealthPort):
    """Report whether the import store is reachable and carries the import schema."""

    def __init__(self, engine: Engine):
        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine
        self._required_table_names = _db_required_table_names()

    def db_connection_label(self) -> str:
        """Return the engine URL with the password masked."""

        return self._engine.url.render_as_string(hide_password=True)

    def db_check_health(self) -> HealthStatus:
        """Inspect the store for every table an import may write.

        A reachable store without the migrated tables reports `unmigrated`
        and lists the missing tables, so operators see a pending
        `alembic upgrade head` before the first import fails.

        Returns:
            HealthStatus: `ok` when every import table exists, `unmigrated` otherwise.

        Raises:
            ConnectionError: Raised when the store cannot be reached or inspected.
        """

        try:
            with self._engine.connect() as connection:
                existing_table_names = set(inspect(connection).get_table_names())
        except SQLAlchemyError as error:
            raise ConnectionError("import store is unreachable") from error

        missing_table_names = [name for name in self._required_table_names if name not in existing_table_names]
        if missing_table_names:
            return HealthStatus(
                status=HEALTH_STATUS_UNMIGRATED,
                detail=f"missing import tables: {', '.join(missing_table_names)}",
            )
        return HealthStatus(
            status=HEALTH_STATUS_READY,
            detail=f"{len(self._required_table_names)} import tables present",
        )
