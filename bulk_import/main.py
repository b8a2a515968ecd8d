"""Main module entrypoint for local runtime execution.

This module validates startup configuration and either launches the FastAPI
service or runs one import batch from a JSON payload file.
"""

import argparse
import json
from pathlib import Path

import uvicorn

from bulk_import.api.schemas import ImportRunRequest
from bulk_import.bootstrap import (
    bootstrap_create_application,
    bootstrap_create_import_transaction,
    bootstrap_load_settings,
)
from bulk_import.config import AppSettings
from bulk_import.db import db_create_engine
from bulk_import.jobs import ImportAbortedError
from bulk_import.mapping import (
    MissingRequiredFieldError,
    mapping_build_import_mapping,
    mapping_get_record_type,
)


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        SystemExit: Raised with code 1 when an import is rejected or aborted.
    """

    argument_parser = argparse.ArgumentParser(description="Bulk import pipeline runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "import-run"),
        help="Runtime command: `api` starts server, `import-run` imports one JSON payload file",
        type=str,
    )
    argument_parser.add_argument("--record-type", dest="record_type", type=str, help="Record type for `import-run`")
    argument_parser.add_argument("--owner-id", dest="owner_id", type=str, help="Owner scope for `import-run`")
    argument_parser.add_argument(
        "--payload-file",
        dest="payload_file",
        type=Path,
        help="JSON file with `rows` and optional `mapping` and `headers` for `import-run`",
    )
    parsed_arguments = argument_parser.parse_args()

    settings = bootstrap_load_settings()

    if parsed_arguments.command == "import-run":
        if not parsed_arguments.record_type or not parsed_arguments.owner_id or parsed_arguments.payload_file is None:
            argument_parser.error("import-run requires --record-type, --owner-id and --payload-file")
        payload = json.loads(parsed_arguments.payload_file.read_text(encoding="utf-8"))
        raise SystemExit(
            main_run_import(
                record_type=parsed_arguments.record_type,
                owner_id=parsed_arguments.owner_id,
                payload=payload,
                settings=settings,
            )
        )

    application = bootstrap_create_application(settings=settings)
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
    )


def main_run_import(
    record_type: str,
    owner_id: str,
    payload: object,
    settings: AppSettings | None = None,
) -> int:
    """Run one import batch and print its result payload.

    Args:
        record_type: Target record type name.
        owner_id: Owning account identifier.
        payload: Decoded JSON object with `rows`, optional `mapping` and optional `headers`.
        settings: Optional preloaded settings.

    Returns:
        int: Process exit code; 0 on a completed batch, 1 on rejection or abort.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
    """

    if not isinstance(payload, dict):
        print("IMPORT_REJECTED:", f"payload must be a JSON object, got {type(payload).__name__}")
        return 1

    resolved_settings = settings or bootstrap_load_settings()
    engine = db_create_engine(database_url=resolved_settings.database_url)
    try:
        definition = mapping_get_record_type(record_type)
        request = ImportRunRequest.model_validate({**payload, "owner_id": owner_id})
        import_mapping = mapping_build_import_mapping(definition, request.api_field_mappings())
        transaction = bootstrap_create_import_transaction(
            record_type=definition.name,
            owner_id=request.owner_id,
            settings=resolved_settings,
            engine=engine,
        )
        result = transaction.job_import_run(
            rows=request.rows,
            import_mapping=import_mapping,
            available_headers=request.headers,
        )
    except MissingRequiredFieldError as error:
        print("MISSING_REQUIRED_FIELD:", ", ".join(error.missing_fields))
        return 1
    except ImportAbortedError as error:
        print("IMPORT_ABORTED:", error)
        return 1
    except ValueError as error:
        print("IMPORT_REJECTED:", error)
        return 1
    finally:
        engine.dispose()

    print(json.dumps(result.import_result_to_payload(), indent=2))
    return 0


if __name__ == "__main__":
    main()
