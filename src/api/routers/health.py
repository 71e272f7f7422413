# This file defines liveness and readiness endpoints shared by every service.
# It exists so orchestration and monitoring systems can verify service health quickly.
# The readiness check confirms database connectivity and that the service's table exists.

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.exc import SQLAlchemyError

from src.api.api_config import ServiceConfig
from src.api.db_access import DatabaseClient
from src.api.dependencies import get_config, get_database_client
from src.api.schemas.health_schemas import HealthResponse, ReadinessResponse

router = APIRouter(tags=["health"])
ConfigDep = Annotated[ServiceConfig, Depends(get_config)]
DBDep = Annotated[DatabaseClient, Depends(get_database_client)]


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _table_ready(db: DatabaseClient, table_name: str) -> bool:
    try:
        return db.table_exists(table_name)
    except SQLAlchemyError:
        # The database can drop between the ping and this lookup.
        return False


@router.get("/health", response_model=HealthResponse)
def health(
    request: Request,
    config: ConfigDep,
) -> dict[str, object]:
    return {
        "request_id": request.state.request_id,
        "status": "ok",
        "environment": config.environment,
        "service_name": config.api_name,
        "version": config.app_version,
        "timestamp": _utc_now(),
    }


@router.get("/ready", response_model=ReadinessResponse)
def ready(
    request: Request,
    config: ConfigDep,
    db: DBDep,
) -> dict[str, object]:
    db_connected = db.can_connect()
    table_ready = db_connected and _table_ready(db, config.table_name)

    return {
        "request_id": request.state.request_id,
        "db_connected": db_connected,
        "table_ready": table_ready,
        "ready": db_connected and table_ready,
        "database": "reachable" if db_connected else "unreachable",
        "timestamp": _utc_now(),
    }
