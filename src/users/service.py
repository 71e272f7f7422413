# This file implements user registration, login, profile lookup, and deletion.
# It exists so the router does not embed credential checks or not-found rules.
# Passwords are stored and compared as submitted; there is no hashing and no session issued.

from __future__ import annotations

import logging
from typing import Any

from src.api.crud import CrudRepository, TableSpec
from src.api.error_handlers import APIError
from src.users.schemas import LoginRequest, RegisterRequest

LOGGER = logging.getLogger("users")


def users_table(table_name: str = "users") -> TableSpec:
    return TableSpec(
        name=table_name,
        select_columns=("id", "username", "email"),
        insert_columns=("username", "password", "email"),
        returning_columns=("id",),
    )


class UserService:
    """Data access for user endpoints."""

    def __init__(self, *, repository: CrudRepository) -> None:
        self.repository = repository

    def register(self, request: RegisterRequest) -> dict[str, Any]:
        return self.repository.create(request.model_dump())

    def login(self, request: LoginRequest) -> dict[str, Any]:
        row = None
        if request.username and request.password:
            row = self.repository.find_one(username=request.username, password=request.password)
        if row is None:
            LOGGER.info("login rejected username=%r", request.username)
            raise APIError(
                status_code=401,
                error_code="INVALID_CREDENTIALS",
                message="Invalid username or password.",
            )
        return {"id": row["id"], "username": row["username"]}

    def get_profile(self, username: str | None) -> dict[str, Any]:
        if not username:
            raise APIError(
                status_code=400,
                error_code="INVALID_QUERY_PARAM",
                message="Username is required.",
            )
        row = self.repository.find_one(username=username)
        if row is None:
            raise APIError(
                status_code=404,
                error_code=self.repository.not_found_code,
                message=f"User {username!r} not found.",
            )
        return row

    def list_profiles(self) -> list[dict[str, Any]]:
        return self.repository.list_all()

    def delete(self, user_id: int) -> dict[str, Any]:
        self.repository.delete_by_id(user_id)
        return {"id": user_id, "status": "deleted"}
