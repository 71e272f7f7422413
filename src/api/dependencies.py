# This file provides dependency factories and shared parameter types for FastAPI routes.
# It exists so handlers receive the database handle through injection instead of a module global.
# The handle and config live on `app.state`, set once by the application lifespan.
# Endpoint tests override these factories to swap in fakes.

from __future__ import annotations

from typing import Annotated

from fastapi import Path, Request

from src.api.api_config import ServiceConfig
from src.api.db_access import DatabaseClient

# At most 19 plain decimal digits with an optional minus sign. Anything else is a 400.
RecordIdPath = Annotated[str, Path(pattern=r"^-?[0-9]{1,19}$")]


def get_config(request: Request) -> ServiceConfig:
    return request.app.state.config


def get_database_client(request: Request) -> DatabaseClient:
    return request.app.state.db
