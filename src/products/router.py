# This file defines the product catalog endpoints.
# `created_at` is assigned by the database and returned from the insert.

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, status

from src.api.api_config import ServiceConfig
from src.api.crud import CrudRepository, TableSpec
from src.api.db_access import DatabaseClient
from src.api.dependencies import get_config, get_database_client
from src.api.schemas.common import ErrorResponse
from src.products.schemas import Product, ProductCreated, ProductCreateRequest

router = APIRouter(tags=["products"])
ConfigDep = Annotated[ServiceConfig, Depends(get_config)]
DBDep = Annotated[DatabaseClient, Depends(get_database_client)]


def products_table(table_name: str = "products") -> TableSpec:
    return TableSpec(
        name=table_name,
        select_columns=("id", "name", "description", "price", "created_at"),
        insert_columns=("name", "description", "price"),
        returning_columns=("id", "created_at"),
    )


def get_product_repository(db: DBDep, config: ConfigDep) -> CrudRepository:
    return CrudRepository(db=db, table=products_table(config.table_name), entity_label="product")


ProductRepositoryDep = Annotated[CrudRepository, Depends(get_product_repository)]


@router.get("/products", response_model=list[Product], responses={500: {"model": ErrorResponse}})
def list_products(repository: ProductRepositoryDep) -> list[dict[str, Any]]:
    return repository.list_all()


@router.post(
    "/product",
    status_code=status.HTTP_201_CREATED,
    response_model=ProductCreated,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def create_product(payload: ProductCreateRequest, repository: ProductRepositoryDep) -> dict[str, Any]:
    return repository.create(payload.model_dump())
