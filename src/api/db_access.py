# This file wraps database access so service handlers can run parameterized SQL safely.
# It exists to keep SQL execution details out of router code and make testing easier.
# One pooled engine is shared by every request; each statement checks out its own connection.
# The pool checkout timeout and the server statement timeout bound every database call.

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError


def engine_options(
    database_url: str, *, pool_size: int, max_overflow: int, timeout_seconds: int
) -> dict[str, Any]:
    """Build `create_engine` keyword arguments for the pooled service engine.

    `timeout_seconds` bounds pool checkout everywhere and, on PostgreSQL, every
    statement through the server-side `statement_timeout` (milliseconds).
    """

    options: dict[str, Any] = {
        "pool_pre_ping": True,
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_timeout": timeout_seconds,
    }
    if make_url(database_url).get_backend_name() == "postgresql":
        options["connect_args"] = {"options": f"-c statement_timeout={timeout_seconds * 1000}"}
    return options


class DatabaseClient:
    """Minimal SQLAlchemy wrapper for service read/write access."""

    def __init__(
        self,
        *,
        database_url: str,
        pool_size: int = 5,
        max_overflow: int = 10,
        timeout_seconds: int = 30,
    ) -> None:
        options = engine_options(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            timeout_seconds=timeout_seconds,
        )
        self._engine: Engine = create_engine(database_url, future=True, **options)

    @property
    def engine(self) -> Engine:
        return self._engine

    def ping(self) -> None:
        with self._engine.connect() as connection:
            connection.execute(text("SELECT 1"))

    def can_connect(self) -> bool:
        try:
            self.ping()
            return True
        except SQLAlchemyError:
            return False

    def table_exists(self, table_name: str) -> bool:
        query = text("SELECT to_regclass(:table_name) IS NOT NULL AS exists_flag")
        with self._engine.connect() as connection:
            result = connection.execute(query, {"table_name": table_name}).scalar_one()
        return bool(result)

    def fetch_all(self, query: str, params: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        with self._engine.connect() as connection:
            rows = connection.execute(text(query), dict(params or {})).mappings().all()
        return [dict(row) for row in rows]

    def fetch_one(self, query: str, params: Mapping[str, Any] | None = None) -> dict[str, Any] | None:
        with self._engine.connect() as connection:
            row = connection.execute(text(query), dict(params or {})).mappings().first()
        return dict(row) if row is not None else None

    def execute(self, query: str, params: Mapping[str, Any] | None = None) -> int:
        """Run a write statement in its own transaction and return the affected row count."""

        with self._engine.begin() as connection:
            result = connection.execute(text(query), dict(params or {}))
            return result.rowcount

    def execute_returning(
        self, query: str, params: Mapping[str, Any] | None = None
    ) -> dict[str, Any] | None:
        """Run a write statement with a RETURNING clause and return the first row."""

        with self._engine.begin() as connection:
            row = connection.execute(text(query), dict(params or {})).mappings().first()
            return dict(row) if row is not None else None

    def close(self) -> None:
        self._engine.dispose()
