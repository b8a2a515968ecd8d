"""Health endpoint router composition for app and import store checks."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from bulk_import.db import HEALTH_STATUS_READY, DatabaseHealthPort


def api_create_health_router(db_health_service: DatabaseHealthPort) -> APIRouter:
    """Create health-check router reporting app and import store status.

    Args:
        db_health_service: DB-layer health service interface.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when db_health_service is invalid.
    """

    if db_health_service is None:
        raise ValueError("db_health_service must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        """Return application and database health state.

        Returns:
            JSONResponse: 200 when the store is ready for imports, 503 otherwise.
        """

        target = db_health_service.db_connection_label()
        try:
            db_health = db_health_service.db_check_health()
        except ConnectionError as error:
            return JSONResponse(
                content={"status": "degraded", "app": "up", "database": "down", "detail": str(error), "target": target},
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        database_ready = db_health.status == HEALTH_STATUS_READY
        return JSONResponse(
            content={
                "status": "ok" if database_ready else "degraded",
                "app": "up",
                "database": db_health.status,
                "detail": db_health.detail,
                "target": target,
            },
            status_code=status.HTTP_200_OK if database_ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    return router
