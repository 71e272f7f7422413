# This file defines the order endpoints mounted under `/order`.
# Orders are created and read; there is no update or delete route.

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, status

from src.api.api_config import ServiceConfig
from src.api.crud import CrudRepository, TableSpec
from src.api.db_access import DatabaseClient
from src.api.dependencies import RecordIdPath, get_config, get_database_client
from src.api.schemas.common import ErrorResponse
from src.orders.schemas import Order, OrderCreated, OrderCreateRequest

router = APIRouter(prefix="/order", tags=["orders"])
ConfigDep = Annotated[ServiceConfig, Depends(get_config)]
DBDep = Annotated[DatabaseClient, Depends(get_database_client)]


def orders_table(table_name: str = "orders") -> TableSpec:
    return TableSpec(
        name=table_name,
        select_columns=("id", "user_id", "product_id", "quantity", "status", "total", "order_date"),
        insert_columns=("user_id", "product_id", "quantity", "status", "total"),
        returning_columns=("id", "order_date"),
    )


def get_order_repository(db: DBDep, config: ConfigDep) -> CrudRepository:
    return CrudRepository(db=db, table=orders_table(config.table_name), entity_label="order")


OrderRepositoryDep = Annotated[CrudRepository, Depends(get_order_repository)]


@router.post(
    "/order",
    status_code=status.HTTP_201_CREATED,
    response_model=OrderCreated,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def create_order(payload: OrderCreateRequest, repository: OrderRepositoryDep) -> dict[str, Any]:
    return repository.create(payload.model_dump())


@router.get("/orders", response_model=list[Order], responses={500: {"model": ErrorResponse}})
def list_orders(repository: OrderRepositoryDep) -> list[dict[str, Any]]:
    return repository.list_all()


@router.get(
    "/order/{order_id}",
    response_model=Order,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def get_order(order_id: RecordIdPath, repository: OrderRepositoryDep) -> dict[str, Any]:
    return repository.get_by_id(int(order_id))
