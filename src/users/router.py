# This file defines the user endpoints mounted under `/user`.
# Login is a bare credential equality check and returns no token.

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, status

from src.api.api_config import ServiceConfig
from src.api.crud import CrudRepository
from src.api.db_access import DatabaseClient
from src.api.dependencies import RecordIdPath, get_config, get_database_client
from src.api.schemas.common import DeleteConfirmation, ErrorResponse
from src.users.schemas import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UserCreated,
    UserProfile,
)
from src.users.service import UserService, users_table

router = APIRouter(prefix="/user", tags=["users"])
ConfigDep = Annotated[ServiceConfig, Depends(get_config)]
DBDep = Annotated[DatabaseClient, Depends(get_database_client)]


def get_user_repository(db: DBDep, config: ConfigDep) -> CrudRepository:
    return CrudRepository(db=db, table=users_table(config.table_name), entity_label="user")


def get_user_service(
    repository: Annotated[CrudRepository, Depends(get_user_repository)],
) -> UserService:
    return UserService(repository=repository)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=UserCreated,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def register_user(payload: RegisterRequest, service: UserServiceDep) -> dict[str, Any]:
    return service.register(payload)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
def login_user(payload: LoginRequest, service: UserServiceDep) -> dict[str, Any]:
    return service.login(payload)


@router.get(
    "/profile",
    response_model=UserProfile,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def get_user_profile(
    service: UserServiceDep,
    username: str | None = Query(default=None),
) -> dict[str, Any]:
    return service.get_profile(username)


@router.get("/users", response_model=list[UserProfile], responses={500: {"model": ErrorResponse}})
def list_users(service: UserServiceDep) -> list[dict[str, Any]]:
    return service.list_profiles()


@router.delete(
    "/users/{user_id}",
    response_model=DeleteConfirmation,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def delete_user(user_id: RecordIdPath, service: UserServiceDep) -> dict[str, Any]:
    return service.delete(int(user_id))
