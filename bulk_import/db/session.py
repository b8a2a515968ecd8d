"""Database engine utilities and SQLAlchemy error translation.

This module centralizes database connectivity primitives to enforce the db-layer
boundary for all SQLAlchemy usage.
"""

from sqlalchemy import Engine, create_engine
from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError, SQLAlchemyError

from .interfaces import PersistenceError, StoreUnavailableError


def db_create_engine(database_url: str) -> Engine:
    """Create the SQLAlchemy engine for application database access.

    Args:
        database_url: SQLAlchemy database URL.

    Returns:
        Engine: Configured SQLAlchemy engine.

    Raises:
        ValueError: Raised when the database URL is blank.
    """

    if not database_url.strip():
        raise ValueError("database_url must not be blank")

    return create_engine(database_url, pool_pre_ping=True)


def db_translate_error(error: SQLAlchemyError, action: str) -> PersistenceError | StoreUnavailableError:
    """Translate one SQLAlchemy failure into the db-layer error taxonomy.

    Connectivity and transaction-engine failures become StoreUnavailableError;
    everything else (constraint and data errors) becomes PersistenceError.

    Args:
        error: Original SQLAlchemy exception.
        action: Short description of the failed operation.

    Returns:
        PersistenceError | StoreUnavailableError: Translated exception, not yet raised.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if isinstance(error, (OperationalError, InterfaceError)):
        return StoreUnavailableError(f"{action} failed: store unavailable")
    if isinstance(error, DBAPIError) and error.connection_invalidated:
        return StoreUnavailableError(f"{action} failed: connection lost")

    detail = getattr(error, "orig", None) or error
    return PersistenceError(f"{action} failed: {detail}")
