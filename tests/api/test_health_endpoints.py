# This file tests health, readiness, and metrics endpoints shared by every service.
# It exists to validate operational contracts used by orchestration and monitoring.
# The tests also confirm the lifespan closes the database handle on shutdown.

from __future__ import annotations

import pytest
from sqlalchemy.exc import OperationalError

from src.orders.app import create_app as create_orders_app
from src.orders.router import get_order_repository, orders_table
from src.products.app import create_app as create_products_app
from src.users.app import create_app as create_users_app
from tests.api.support import (
    FakeDBClient,
    InMemoryRepository,
    build_test_config,
    service_test_client,
)

FACTORIES = {
    "users": create_users_app,
    "orders": create_orders_app,
    "products": create_products_app,
}


@pytest.mark.parametrize("service", sorted(FACTORIES))
def test_health_endpoint_returns_expected_fields(service: str) -> None:
    config = build_test_config(service)
    with service_test_client(create_app=FACTORIES[service], config=config) as client:
        response = client.get("/health")

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["environment"] == "test"
    assert payload["service_name"] == config.api_name
    assert payload["request_id"]
    assert "timestamp" in payload


def test_ready_endpoint_reflects_table_status() -> None:
    config = build_test_config("orders")
    with service_test_client(
        create_app=create_orders_app, config=config, db_client=FakeDBClient(connected=True)
    ) as client:
        ready = client.get("/ready")

    with service_test_client(
        create_app=create_orders_app,
        config=config,
        db_client=FakeDBClient(connected=True, existing_tables={"users"}),
    ) as client:
        missing_table = client.get("/ready")

    assert ready.json()["ready"] is True
    assert ready.json()["database"] == "reachable"
    assert missing_table.json()["db_connected"] is True
    assert missing_table.json()["table_ready"] is False
    assert missing_table.json()["ready"] is False


class DroppingCatalogDBClient(FakeDBClient):
    """Answers the ping, then loses the connection on the table lookup."""

    def table_exists(self, table_name: str) -> bool:
        raise OperationalError("SELECT to_regclass", {}, Exception("server closed the connection"))


def test_ready_reports_not_ready_when_table_lookup_fails() -> None:
    config = build_test_config("orders")
    with service_test_client(
        create_app=create_orders_app, config=config, db_client=DroppingCatalogDBClient()
    ) as client:
        response = client.get("/ready")

    assert response.status_code == 200
    payload = response.json()
    assert payload["db_connected"] is True
    assert payload["table_ready"] is False
    assert payload["ready"] is False


def test_request_id_header_is_echoed() -> None:
    config = build_test_config("users")
    with service_test_client(create_app=create_users_app, config=config) as client:
        response = client.get("/health", headers={"x-request-id": "req-123"})

    assert response.headers["x-request-id"] == "req-123"
    assert response.json()["request_id"] == "req-123"
    assert "x-response-time-ms" in response.headers


def test_metrics_endpoint_exposes_request_counters() -> None:
    config = build_test_config("products")
    with service_test_client(create_app=create_products_app, config=config) as client:
        client.get("/health")
        response = client.get("/metrics")

    assert response.status_code == 200
    assert "api_http_requests_total" in response.text


def test_metrics_label_paths_by_route_template() -> None:
    config = build_test_config("orders")
    repository = InMemoryRepository(table=orders_table(), entity_label="order")
    with service_test_client(
        create_app=create_orders_app,
        config=config,
        overrides={get_order_repository: repository},
    ) as client:
        for order_id in (918273, 918274, 918275):
            client.get(f"/order/order/{order_id}")
        for index in range(3):
            client.get(f"/no/such/route/{index}")
        response = client.get("/metrics")

    text = response.text
    assert 'path="/order/order/{order_id}"' in text
    assert 'path="unmatched"' in text
    assert "/order/order/918273" not in text
    assert "/no/such/route" not in text
    inflight = [line for line in text.splitlines() if line.startswith("api_http_inflight_requests{")]
    assert inflight
    assert all("path=" not in line for line in inflight)


def test_lifespan_closes_database_client() -> None:
    db_client = FakeDBClient()
    config = build_test_config("users")
    with service_test_client(create_app=create_users_app, config=config, db_client=db_client):
        assert db_client.closed is False

    assert db_client.closed is True
