# This file defines runtime settings for each HTTP service in one place.
# It exists so ports, pool sizes, deadlines, and table names can be configured without code edits.
# The config loader reads environment variables and applies safe defaults for local development.
# Each service gets its own default port so all three can run side by side.

from __future__ import annotations

import os
import re
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, field_validator

from src.common.db import DEFAULT_CONNECT_ATTEMPTS, DEFAULT_CONNECT_DELAY_SECONDS
from src.common.settings import load_settings

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

# service -> (title, default port, port env var, table name)
SERVICE_DEFAULTS: dict[str, tuple[str, int, str, str]] = {
    "users": ("User Service", 8080, "USER_SERVICE_PORT", "users"),
    "orders": ("Order Service", 8081, "ORDER_SERVICE_PORT", "orders"),
    "products": ("Product Service", 8082, "PRODUCT_SERVICE_PORT", "products"),
}


class ServiceConfig(BaseModel):
    """Typed runtime configuration for one service process."""

    model_config = ConfigDict(extra="ignore")

    service_name: str
    api_name: str
    host: str = "0.0.0.0"
    port: int
    environment: str = "local"
    log_level: str = "INFO"
    database_url: str
    table_name: str
    pool_size: int = 5
    max_overflow: int = 10
    request_timeout_seconds: int = 30
    connect_max_attempts: int = DEFAULT_CONNECT_ATTEMPTS
    connect_retry_delay_seconds: float = DEFAULT_CONNECT_DELAY_SECONDS
    app_version: str = "0.1.0"

    @field_validator("service_name")
    @classmethod
    def validate_service_name(cls, value: str) -> str:
        if value not in SERVICE_DEFAULTS:
            raise ValueError(f"Unknown service: {value!r}")
        return value

    @field_validator("table_name")
    @classmethod
    def validate_identifier(cls, value: str) -> str:
        if not _IDENTIFIER_RE.match(value):
            raise ValueError(f"Unsafe SQL identifier: {value!r}")
        return value

    @field_validator("port", "pool_size", "request_timeout_seconds", "connect_max_attempts")
    @classmethod
    def validate_positive_ints(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("Value must be greater than 0.")
        return value

    @field_validator("max_overflow")
    @classmethod
    def validate_non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("Value must not be negative.")
        return value


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


def load_service_config(service: str, *, load_env: bool = True) -> ServiceConfig:
    """Load configuration for `service` from `.env` and process environment."""

    if service not in SERVICE_DEFAULTS:
        raise ValueError(f"Unknown service: {service!r}")

    settings = load_settings(load_env=load_env)
    title, default_port, port_env_var, table_name = SERVICE_DEFAULTS[service]

    return ServiceConfig.model_validate(
        {
            "service_name": service,
            "api_name": title,
            "host": os.getenv("SERVICE_HOST", "0.0.0.0"),
            "port": _env_int(port_env_var, default_port),
            "environment": settings.ENV,
            "log_level": settings.LOG_LEVEL,
            "database_url": settings.database_url(),
            "table_name": table_name,
            "pool_size": _env_int("DB_POOL_SIZE", 5),
            "max_overflow": _env_int("DB_MAX_OVERFLOW", 10),
            "request_timeout_seconds": _env_int("REQUEST_TIMEOUT_SECONDS", 30),
            "connect_max_attempts": _env_int("DB_CONNECT_MAX_ATTEMPTS", DEFAULT_CONNECT_ATTEMPTS),
            "connect_retry_delay_seconds": _env_float(
                "DB_CONNECT_RETRY_DELAY_SECONDS", DEFAULT_CONNECT_DELAY_SECONDS
            ),
            "app_version": os.getenv("APP_VERSION", "0.1.0"),
        }
    )


@lru_cache(maxsize=None)
def get_service_config(service: str) -> ServiceConfig:
    """Cached accessor for a service's config."""

    return load_service_config(service)
