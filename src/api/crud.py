# This file implements the create/list/get/delete pattern shared by every service table.
# It exists so routers stay thin and every table gets the same SQL shapes and not-found rules.
# Each operation is a single parameterized statement; no locks are taken in the application.
# Concurrent writes are serialized by the connection pool and the database, not by this layer.

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from src.api.error_handlers import APIError

LOGGER = logging.getLogger("crud")

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

# Keys are SERIAL columns; anything outside this range cannot match a row.
MIN_RECORD_ID = 1
MAX_RECORD_ID = 2_147_483_647


class SupportsQueries(Protocol):
    def fetch_all(self, query: str, params: Mapping[str, Any] | None = None) -> list[dict[str, Any]]: ...

    def fetch_one(self, query: str, params: Mapping[str, Any] | None = None) -> dict[str, Any] | None: ...

    def execute(self, query: str, params: Mapping[str, Any] | None = None) -> int: ...

    def execute_returning(
        self, query: str, params: Mapping[str, Any] | None = None
    ) -> dict[str, Any] | None: ...


def _validate_identifier(identifier: str) -> str:
    if not _IDENTIFIER_RE.match(identifier):
        raise ValueError(f"Unsafe SQL identifier: {identifier!r}")
    return identifier


@dataclass(frozen=True)
class TableSpec:
    """Column layout of one service table."""

    name: str
    select_columns: tuple[str, ...]
    insert_columns: tuple[str, ...]
    returning_columns: tuple[str, ...]
    key_column: str = "id"

    def __post_init__(self) -> None:
        _validate_identifier(self.name)
        _validate_identifier(self.key_column)
        for column in (*self.select_columns, *self.insert_columns, *self.returning_columns):
            _validate_identifier(column)
        if not self.select_columns or not self.insert_columns:
            raise ValueError(f"Table {self.name!r} needs select and insert columns.")


def is_storable_id(record_id: int) -> bool:
    return MIN_RECORD_ID <= record_id <= MAX_RECORD_ID


class CrudRepository:
    """Single-statement CRUD access to one table."""

    def __init__(self, *, db: SupportsQueries, table: TableSpec, entity_label: str) -> None:
        self.db = db
        self.table = table
        self.entity_label = entity_label

    @property
    def _select_list(self) -> str:
        return ", ".join(self.table.select_columns)

    @property
    def not_found_code(self) -> str:
        return f"{self.entity_label.upper()}_NOT_FOUND"

    def create(self, values: Mapping[str, Any]) -> dict[str, Any]:
        unknown = set(values) - set(self.table.insert_columns)
        if unknown:
            raise ValueError(f"Unknown columns for {self.table.name}: {sorted(unknown)}")

        columns = ", ".join(self.table.insert_columns)
        placeholders = ", ".join(f":{column}" for column in self.table.insert_columns)
        returning = ", ".join(self.table.returning_columns or (self.table.key_column,))
        query = f"""
        INSERT INTO {self.table.name} ({columns})
        VALUES ({placeholders})
        RETURNING {returning}
        """
        params = {column: values.get(column) for column in self.table.insert_columns}
        row = self.db.execute_returning(query, params)
        if row is None:
            raise APIError(
                status_code=500,
                error_code="STORAGE_ERROR",
                message=f"Insert into {self.table.name} returned no row.",
            )
        LOGGER.info(
            "created %s %s=%s",
            self.entity_label,
            self.table.key_column,
            row.get(self.table.key_column),
        )
        return row

    def list_all(self) -> list[dict[str, Any]]:
        query = f"""
        SELECT {self._select_list}
        FROM {self.table.name}
        ORDER BY {self.table.key_column} ASC
        """
        return self.db.fetch_all(query)

    def get_by_id(self, record_id: int) -> dict[str, Any]:
        row = None
        if is_storable_id(record_id):
            query = f"""
            SELECT {self._select_list}
            FROM {self.table.name}
            WHERE {self.table.key_column} = :record_id
            """
            row = self.db.fetch_one(query, {"record_id": record_id})
        if row is None:
            raise self._not_found(record_id)
        return row

    def find_one(self, **criteria: Any) -> dict[str, Any] | None:
        if not criteria:
            raise ValueError("find_one needs at least one criterion.")
        where_sql = " AND ".join(
            f"{_validate_identifier(column)} = :{column}" for column in criteria
        )
        query = f"""
        SELECT {self._select_list}
        FROM {self.table.name}
        WHERE {where_sql}
        ORDER BY {self.table.key_column} ASC
        LIMIT 1
        """
        return self.db.fetch_one(query, criteria)

    def delete_by_id(self, record_id: int) -> None:
        affected = 0
        if is_storable_id(record_id):
            query = f"DELETE FROM {self.table.name} WHERE {self.table.key_column} = :record_id"
            affected = self.db.execute(query, {"record_id": record_id})
        if affected == 0:
            raise self._not_found(record_id)
        LOGGER.info("deleted %s %s=%s", self.entity_label, self.table.key_column, record_id)

    def _not_found(self, record_id: int) -> APIError:
        return APIError(
            status_code=404,
            error_code=self.not_found_code,
            message=f"{self.entity_label.capitalize()} {record_id} not found.",
        )
