"""DDL helpers for the service tables."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy.engine import Engine

# Shipped as package data next to this module.
DDL_DIR = Path(__file__).resolve().parent / "sql"

SERVICE_DDL_FILES: dict[str, str] = {
    "users": "users.sql",
    "products": "products.sql",
    "orders": "orders.sql",
}


def apply_service_ddl(engine: Engine, service: str, ddl_dir: Path | None = None) -> None:
    """Create the table owned by `service` if it does not exist yet."""

    if service not in SERVICE_DDL_FILES:
        raise ValueError(f"Unknown service: {service!r}")

    ddl_path = ddl_dir or DDL_DIR
    sql_text = (ddl_path / SERVICE_DDL_FILES[service]).read_text(encoding="utf-8")
    with engine.begin() as connection:
        connection.exec_driver_sql(sql_text)
