"""
End-to-end tests for the /api routes through FastAPI's TestClient.

Each test gets its own seeded on-disk database; background jobs are not started.
"""

from datetime import datetime
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app import create_app
from conftest import cart_entry, seed_catalog_sync
from repositories.order_detail import OrderDetailRepository
from web.api_router import format_health_time


@pytest.fixture
def client(tmp_path):
    db_file = tmp_path / "api.sqlite"
    seed_catalog_sync(db_file)
    app = create_app(db_url=f"sqlite+aiosqlite:///{db_file}", start_jobs=False)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


def place_order(client, cart, user_id="client-a"):
    headers = {"X-User-ID": user_id} if user_id else {}
    return client.post("/api/order", json={"cart": cart}, headers=headers)


class TestHealthAndMenu:

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "OK"
        assert response.json()["time"]

    @pytest.mark.parametrize("now, expected", [
        (datetime(2026, 2, 5, 14, 5, 9), "2/5/2026, 2:05:09 PM"),
        (datetime(2026, 10, 19, 0, 30, 0), "10/19/2026, 12:30:00 AM"),
        (datetime(2026, 10, 19, 12, 0, 1), "10/19/2026, 12:00:01 PM"),
        (datetime(2026, 1, 1, 9, 59, 59), "1/1/2026, 9:59:59 AM"),
    ])
    def test_health_time_is_not_zero_padded(self, now, expected):
        assert format_health_time(now) == expected

    def test_cors_header(self, client):
        response = client.get("/api/health", headers={"Origin": "https://pizza.example"})

        assert response.headers["access-control-allow-origin"] == "*"

    def test_pizzas(self, client):
        response = client.get("/api/pizzas")

        assert response.status_code == 200
        pizzas = response.json()
        assert [p["id"] for p in pizzas] == ["hawaiian", "pepperoni", "veggie_veg"]
        assert pizzas[1]["sizes"] == {"S": 9.75, "M": 12.5, "L": 15.25}
        assert pizzas[1]["image"] == "/pizzas/pepperoni.webp"

    def test_pizza_of_the_day(self, client):
        response = client.get("/api/pizza-of-the-day")

        assert response.status_code == 200
        assert response.json()["id"] in {"hawaiian", "pepperoni", "veggie_veg"}
        assert set(response.json()["sizes"]) == {"S", "M", "L"}


class TestCreateOrder:

    def test_created_with_client_header(self, client):
        response = place_order(client, [cart_entry("hawaiian", "M")] * 2 + [cart_entry("pepperoni", "L")])

        assert response.status_code == 200
        body = response.json()
        assert body["userId"] == "client-a"
        assert isinstance(body["orderId"], int)

    def test_client_id_generated_when_header_absent(self, client):
        body = place_order(client, [cart_entry("hawaiian", "S")], user_id=None).json()

        assert body["userId"]
        orders = client.get("/api/orders", headers={"X-User-ID": body["userId"]}).json()
        assert [o["order_id"] for o in orders] == [body["orderId"]]

    @pytest.mark.parametrize("payload", [{}, {"cart": []}, {"cart": "hawaiian_s"}, [], {"cart": [{"size": "M"}]}])
    def test_invalid_cart(self, client, payload):
        response = client.post("/api/order", json=payload, headers={"X-User-ID": "client-a"})

        assert response.status_code == 400
        assert "error" in response.json()

    def test_malformed_entry_message(self, client):
        response = place_order(client, [cart_entry("hawaiian", "S"), {"pizza": {}, "size": "M"}])

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid item data"}
        assert client.get("/api/orders", headers={"X-User-ID": "client-a"}).json() == []

    def test_unknown_variant(self, client):
        response = place_order(client, [cart_entry("calzone", "M")])

        assert response.status_code == 400
        assert response.json() == {"error": "Unknown pizza variant"}

    def test_malformed_json(self, client):
        response = client.post(
            "/api/order",
            content=b"{not json",
            headers={"X-User-ID": "client-a", "Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request data"}

    def test_storage_failure_is_rolled_back(self, client):
        async def failing_create_many(order_details, session):
            raise OperationalError("INSERT INTO order_details", {}, Exception("disk I/O error"))

        with patch.object(OrderDetailRepository, "create_many", new=failing_create_many):
            response = place_order(client, [cart_entry("hawaiian", "S")])

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to create order"}
        assert client.get("/api/orders", headers={"X-User-ID": "client-a"}).json() == []


class TestReadOrders:

    def test_order_detail(self, client):
        order_id = place_order(client, [cart_entry("hawaiian", "M")] * 2 + [cart_entry("pepperoni", "L")]).json()["orderId"]

        response = client.get("/api/order", params={"id": order_id}, headers={"X-User-ID": "client-a"})

        assert response.status_code == 200
        body = response.json()
        assert body["order"]["order_id"] == order_id
        assert body["order"]["total"] == 41.75
        assert {item["pizzaTypeId"]: item["quantity"] for item in body["orderItems"]} == {"hawaiian": 2, "pepperoni": 1}

    def test_order_requires_user_id(self, client):
        response = client.get("/api/order", params={"id": 1})

        assert response.status_code == 400
        assert response.json() == {"error": "User ID required"}

    def test_order_requires_order_id(self, client):
        response = client.get("/api/order", headers={"X-User-ID": "client-a"})

        assert response.status_code == 400
        assert response.json() == {"error": "Order ID required"}

    def test_foreign_order_not_found(self, client):
        order_id = place_order(client, [cart_entry("hawaiian", "S")]).json()["orderId"]

        response = client.get("/api/order", params={"id": order_id}, headers={"X-User-ID": "client-b"})

        assert response.status_code == 404
        assert response.json() == {"error": "Order not found or unauthorized"}

    def test_non_numeric_order_id_not_found(self, client):
        response = client.get("/api/past-order/abc", headers={"X-User-ID": "client-a"})

        assert response.status_code == 404

    @pytest.mark.parametrize("path", ["/api/order?id=99999999999999999999", "/api/past-order/99999999999999999999"])
    def test_order_id_too_large_not_found(self, client, path):
        response = client.get(path, headers={"X-User-ID": "client-a"})

        assert response.status_code == 404
        assert response.json() == {"error": "Order not found or unauthorized"}

    def test_page_too_large_is_empty(self, client):
        place_order(client, [cart_entry("hawaiian", "S")])

        response = client.get("/api/past-orders", params={"page": "99999999999999999999"}, headers={"X-User-ID": "client-a"})

        assert response.status_code == 200
        assert response.json() == []

    def test_past_order(self, client):
        order_id = place_order(client, [cart_entry("veggie_veg", "L")]).json()["orderId"]

        response = client.get(f"/api/past-order/{order_id}", headers={"X-User-ID": "client-a"})

        assert response.status_code == 200
        assert response.json()["orderItems"][0]["total"] == 20.25

    def test_orders_requires_user_id(self, client):
        response = client.get("/api/orders")

        assert response.status_code == 400
        assert response.json() == {"error": "User ID required"}

    def test_past_orders_pagination(self, client):
        order_ids = [place_order(client, [cart_entry("hawaiian", "S")]).json()["orderId"] for _ in range(21)]
        headers = {"X-User-ID": "client-a"}

        first = client.get("/api/past-orders", headers=headers).json()
        second = client.get("/api/past-orders", params={"page": 2}, headers=headers).json()
        fallback = client.get("/api/past-orders", params={"page": "abc"}, headers=headers).json()

        assert len(first) == 20
        assert first[0]["order_id"] == order_ids[-1]
        assert [o["order_id"] for o in second] == [order_ids[0]]
        assert fallback == first


class TestContact:

    def test_submission_accepted(self, client):
        response = client.post("/api/contact", json={"name": "Ada", "email": "ada@example.com", "message": "Hi"})

        assert response.status_code == 200
        assert response.json() == {"success": "Message received"}

    def test_numeric_fields_accepted(self, client):
        response = client.post("/api/contact", json={"name": 123, "email": "ada@example.com", "message": 4.5})

        assert response.status_code == 200
        assert response.json() == {"success": "Message received"}

    @pytest.mark.parametrize("name", [0, False, [], {}])
    def test_empty_non_string_field_is_missing(self, client, name):
        response = client.post("/api/contact", json={"name": name, "email": "ada@example.com", "message": "Hi"})

        assert response.status_code == 400
        assert response.json() == {"error": "All fields are required"}

    @pytest.mark.parametrize("payload", [{"name": "Ada", "email": "ada@example.com"}, {"name": " ", "email": "a@b.co", "message": "x"}])
    def test_missing_field(self, client, payload):
        response = client.post("/api/contact", json=payload)

        assert response.status_code == 400
        assert response.json() == {"error": "All fields are required"}

    def test_empty_body(self, client):
        response = client.post("/api/contact")

        assert response.status_code == 400
        assert response.json() == {"error": "All fields are required"}
