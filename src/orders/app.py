"""Orders service application factory."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI

from src.api.api_config import ServiceConfig, get_service_config
from src.api.app import create_service_app
from src.orders.router import router


def create_app(config: ServiceConfig | None = None, *, db_client: Any | None = None) -> FastAPI:
    return create_service_app(
        config=config or get_service_config("orders"),
        routers=[router],
        db_client=db_client,
        description="Create and read customer orders.",
    )
