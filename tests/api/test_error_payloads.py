# This file tests the storage-failure path through real repositories and a failing database.
# It exists so driver errors always surface as a 500 with the shared error body and no driver text.

from __future__ import annotations

from src.orders.app import create_app as create_orders_app
from src.products.app import create_app as create_products_app
from src.users.app import create_app as create_users_app
from tests.api.support import FailingDBClient, build_test_config, service_test_client


def test_list_orders_storage_failure_is_500() -> None:
    with service_test_client(
        create_app=create_orders_app,
        config=build_test_config("orders"),
        db_client=FailingDBClient(),
    ) as client:
        response = client.get("/order/orders")

    assert response.status_code == 500
    payload = response.json()
    assert payload["error_code"] == "STORAGE_ERROR"
    assert "server closed" not in payload["message"]


def test_create_product_storage_failure_is_500() -> None:
    with service_test_client(
        create_app=create_products_app,
        config=build_test_config("products"),
        db_client=FailingDBClient(),
    ) as client:
        response = client.post("/product", json={"name": "Widget", "description": "x", "price": 1.0})

    assert response.status_code == 500
    assert response.json()["error_code"] == "STORAGE_ERROR"


def test_delete_user_storage_failure_is_500() -> None:
    with service_test_client(
        create_app=create_users_app,
        config=build_test_config("users"),
        db_client=FailingDBClient(),
    ) as client:
        response = client.delete("/user/users/3")
        out_of_range = client.delete("/user/users/0")

    assert response.status_code == 500
    assert out_of_range.status_code == 404
