"""Import API router composition for record-type catalogue and batch import endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from bulk_import.config import AppSettings
from bulk_import.db import ImportRecordRepositoryPort
from bulk_import.jobs import (
    EntityResolverPort,
    ImportAbortedError,
    ImportTransaction,
    ImportTransactionConfig,
)
from bulk_import.mapping import (
    FieldMapperPort,
    MissingRequiredFieldError,
    RecordTypeDefinition,
    UnknownRecordTypeError,
    mapping_build_import_mapping,
    mapping_get_record_type,
)

from ..schemas import ImportRunRequest

logger = logging.getLogger(__name__)


def api_create_imports_router(
    settings: AppSettings,
    field_mapper: FieldMapperPort,
    entity_resolver: EntityResolverPort,
    record_repository: ImportRecordRepositoryPort,
) -> APIRouter:
    """Create import router with catalogue and batch import endpoints.

    Args:
        settings: Runtime settings supplying the batch row limit.
        field_mapper: Mapping-layer column resolver.
        entity_resolver: Job-layer contact find-or-create service.
        record_repository: DB-layer import record repository.

    Returns:
        APIRouter: Router exposing import APIs.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if field_mapper is None:
        raise ValueError("field_mapper must not be None")
    if entity_resolver is None:
        raise ValueError("entity_resolver must not be None")
    if record_repository is None:
        raise ValueError("record_repository must not be None")

    router = APIRouter(prefix="/imports", tags=["imports"])

    @router.get("/{record_type}/fields")
    def api_import_fields(record_type: str) -> JSONResponse:
        """Return canonical fields for one record type.

        Args:
            record_type: Record type name.

        Returns:
            JSONResponse: Field catalogue payload or 404 when the type is unknown.
        """

        try:
            definition = mapping_get_record_type(record_type)
        except UnknownRecordTypeError as error:
            return _api_error_response(status.HTTP_404_NOT_FOUND, "UNKNOWN_RECORD_TYPE", str(error))
        return JSONResponse(content=api_serialize_record_type(definition), status_code=status.HTTP_200_OK)

    @router.post("/{record_type}")
    def api_import_run(record_type: str, request: ImportRunRequest) -> JSONResponse:
        """Run one import batch for a record type.

        Args:
            record_type: Record type name.
            request: Rows, caller mapping and owner scope.

        Returns:
            JSONResponse: ImportResult payload, or an error payload for hard failures.
        """

        try:
            definition = mapping_get_record_type(record_type)
        except UnknownRecordTypeError as error:
            return _api_error_response(status.HTTP_404_NOT_FOUND, "UNKNOWN_RECORD_TYPE", str(error))

        if len(request.rows) > settings.import_max_rows:
            return _api_error_response(
                status.HTTP_413_CONTENT_TOO_LARGE,
                "ROW_LIMIT_EXCEEDED",
                f"import batch has {len(request.rows)} rows; limit is {settings.import_max_rows}",
            )

        try:
            import_mapping = mapping_build_import_mapping(definition, request.api_field_mappings())
        except ValueError as error:
            return _api_error_response(status.HTTP_400_BAD_REQUEST, "INVALID_MAPPING", str(error))

        transaction = ImportTransaction(
            field_mapper=field_mapper,
            entity_resolver=entity_resolver,
            record_repository=record_repository,
            config=ImportTransactionConfig(
                record_type=definition.name,
                owner_id=request.owner_id,
                max_rows=settings.import_max_rows,
            ),
        )
        try:
            result = transaction.job_import_run(
                rows=request.rows,
                import_mapping=import_mapping,
                available_headers=request.headers,
            )
        except MissingRequiredFieldError as error:
            payload = {
                "status": "error",
                "code": "MISSING_REQUIRED_FIELD",
                "message": str(error),
                "missing_fields": list(error.missing_fields),
            }
            return JSONResponse(content=payload, status_code=status.HTTP_400_BAD_REQUEST)
        except ImportAbortedError as error:
            return _api_error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "IMPORT_ABORTED", str(error))

        return JSONResponse(content=result.import_result_to_payload(), status_code=status.HTTP_200_OK)

    return router


def api_serialize_record_type(definition: RecordTypeDefinition) -> dict[str, object]:
    """Serialize one record type definition into API payload shape.

    Args:
        definition: Catalogue definition.

    Returns:
        dict[str, object]: JSON-compatible catalogue payload.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return {
        "record_type": definition.name,
        "natural_key_field": definition.natural_key_field,
        "natural_key_required": definition.natural_key_required,
        "fields": [
            {
                "name": field_definition.name,
                "display_name": field_definition.display_name,
                "kind": field_definition.kind,
                "alternative_names": list(field_definition.alternative_names),
                "default": field_definition.default,
                "natural_key": field_definition.name == definition.natural_key_field,
            }
            for field_definition in definition.fields
        ],
    }


def _api_error_response(status_code: int, code: str, message: str) -> JSONResponse:
    logger.warning("Import request rejected with %s: %s", code, message)
    return JSONResponse(content={"status": "error", "code": code, "message": message}, status_code=status_code)
