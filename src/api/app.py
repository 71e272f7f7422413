# This file builds a FastAPI application for one service and registers its routers.
# It exists so startup behavior, middleware, and error handling are configured the same way for every service.
# The lifespan opens the pooled database client with retries and disposes it on shutdown.
# The app adds request IDs, timing headers, and Prometheus metrics for operations visibility.

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from typing import Any

from fastapi import APIRouter, FastAPI, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from starlette.middleware.base import RequestResponseEndpoint

from src.api.api_config import ServiceConfig
from src.api.db_access import DatabaseClient
from src.api.error_handlers import register_error_handlers
from src.api.routers.health import router as health_router
from src.common.db import DatabaseUnavailableError, connect_with_retry
from src.common.logging import configure_logging

LOGGER = logging.getLogger("api")

API_HTTP_REQUESTS_TOTAL = Counter(
    "api_http_requests_total",
    "Total number of HTTP requests processed by the service.",
    ["service", "method", "path", "status_code"],
)
API_HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "api_http_request_duration_seconds",
    "Service request duration in seconds.",
    ["service", "method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)
API_HTTP_INFLIGHT_REQUESTS = Gauge(
    "api_http_inflight_requests",
    "Number of service requests currently being processed.",
    ["service", "method"],
)


def open_database_client(config: ServiceConfig) -> DatabaseClient:
    """Create the pooled client and wait until the database answers."""

    client = DatabaseClient(
        database_url=config.database_url,
        pool_size=config.pool_size,
        max_overflow=config.max_overflow,
        timeout_seconds=config.request_timeout_seconds,
    )
    try:
        connect_with_retry(
            client,
            max_attempts=config.connect_max_attempts,
            delay_seconds=config.connect_retry_delay_seconds,
        )
    except DatabaseUnavailableError:
        client.close()
        LOGGER.critical("%s cannot start without a database", config.api_name)
        raise
    return client


UNMATCHED_ROUTE_LABEL = "unmatched"


def _route_label(request: Request) -> str:
    # Route templates only, so ids and scanned URLs never become label values.
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ROUTE_LABEL


def create_service_app(
    *,
    config: ServiceConfig,
    routers: Iterable[APIRouter],
    db_client: Any | None = None,
    description: str = "",
) -> FastAPI:
    """Create configured FastAPI application for one service.

    When `db_client` is given it is used as-is and no connection attempt is made.
    """

    configure_logging(config.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        db = db_client if db_client is not None else open_database_client(config)
        app.state.db = db
        LOGGER.info("%s is running on port %d", config.api_name, config.port)
        try:
            yield
        finally:
            db.close()
            LOGGER.info("%s stopped", config.api_name)

    app = FastAPI(
        title=config.api_name,
        description=description,
        version=config.app_version,
        lifespan=lifespan,
    )
    app.state.config = config

    @app.middleware("http")
    async def request_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        method_label = request.method
        started = time.perf_counter()
        status_code = 500
        API_HTTP_INFLIGHT_REQUESTS.labels(service=config.service_name, method=method_label).inc()
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
            duration_ms = (time.perf_counter() - started) * 1000.0

            response.headers["x-request-id"] = request_id
            response.headers["x-response-time-ms"] = f"{duration_ms:.2f}"
            return response
        finally:
            duration_s = time.perf_counter() - started
            path_label = _route_label(request)
            API_HTTP_REQUESTS_TOTAL.labels(
                service=config.service_name,
                method=method_label,
                path=path_label,
                status_code=str(status_code),
            ).inc()
            API_HTTP_REQUEST_DURATION_SECONDS.labels(
                service=config.service_name,
                method=method_label,
                path=path_label,
            ).observe(duration_s)
            API_HTTP_INFLIGHT_REQUESTS.labels(service=config.service_name, method=method_label).dec()

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    register_error_handlers(app)

    app.include_router(health_router)
    for router in routers:
        app.include_router(router)

    return app
