"""Integration tests for the Intake API endpoints via TestClient."""

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from intake.api.routes import router
from intake.domain import intake
from intake.order.service import OrderService

from tests.intake.factories import item_payload, order_payload


def _client_for(service):
    app = FastAPI()

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        with intake.domain_context():
            return await call_next(request)

    app.include_router(router)
    app.state.order_service = service
    return TestClient(app)


@pytest.fixture()
def client(service):
    return _client_for(service)


class TestAddOrder:
    def test_echoes_accepted_order(self, client):
        payload = order_payload("o1", transaction="t1")

        response = client.post("/add_order", json=payload)

        assert response.status_code == 200
        assert response.json() == payload

    def test_response_is_pretty_printed(self, client):
        response = client.post("/add_order", json=order_payload("o1"))

        assert response.text.startswith('{\n  "order_uid": "o1"')

    def test_order_is_listed_after_acceptance(self, client):
        client.post("/add_order", json=order_payload("o1"))

        response = client.get("/get_orders")

        assert [order["order_uid"] for order in response.json()] == ["o1"]

    def test_duplicate_transaction_is_a_server_error(self, client, service):
        client.post("/add_order", json=order_payload("o1", transaction="t1"))

        response = client.post("/add_order", json=order_payload("o2", transaction="t1"))

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["message"]
        assert service.count() == 1

    def test_unreachable_storage(self, unreachable_repository):
        service = OrderService(unreachable_repository)
        client = _client_for(service)

        response = client.post("/add_order", json=order_payload("o1"))

        assert response.status_code == 500
        assert response.json()["success"] is False
        assert service.count() == 0

    def test_malformed_json_is_rejected(self, client, service):
        response = client.post(
            "/add_order",
            content=b'{"order_uid": ',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 422
        assert service.count() == 0

    def test_missing_field_is_rejected(self, client, service):
        payload = order_payload("o1")
        del payload["payment"]

        response = client.post("/add_order", json=payload)

        assert response.status_code == 422
        assert service.count() == 0

    def test_negative_amount_is_rejected(self, client, service):
        payload = order_payload("o1")
        payload["payment"]["amount"] = -10

        response = client.post("/add_order", json=payload)

        assert response.status_code == 422
        assert service.count() == 0

    def test_identifier_beyond_storage_range_is_rejected(self, client, service):
        response = client.post("/add_order", json=order_payload("o1", items=[item_payload(2**63)]))

        assert response.status_code == 422
        assert service.count() == 0

    def test_largest_storable_identifier_is_accepted(self, client):
        response = client.post("/add_order", json=order_payload("o1", items=[item_payload(2**63 - 1)]))

        assert response.status_code == 200
        assert response.json()["items"][0]["chrt_id"] == 2**63 - 1

    def test_conflicting_catalog_item_is_rejected(self, client, service):
        client.post("/add_order", json=order_payload("o1", transaction="t1", items=[item_payload(100)]))

        response = client.post(
            "/add_order", json=order_payload("o2", transaction="t2", items=[item_payload(100, size="XL")])
        )

        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert "size" in body["message"]
        assert service.count() == 1

    def test_order_without_items(self, client):
        response = client.post("/add_order", json=order_payload("o1", items=[]))

        assert response.status_code == 200
        assert response.json()["items"] == []


class TestGetOrders:
    def test_empty(self, client):
        response = client.get("/get_orders")

        assert response.status_code == 200
        assert response.json() == []
        assert response.text == "[]"

    def test_lists_orders_in_acceptance_order(self, client):
        client.post("/add_order", json=order_payload("o1", items=[item_payload(100)]))
        client.post("/add_order", json=order_payload("o2", items=[item_payload(200), item_payload(300)]))

        orders = client.get("/get_orders").json()

        assert [order["order_uid"] for order in orders] == ["o1", "o2"]
        assert [i["chrt_id"] for i in orders[1]["items"]] == [200, 300]

    def test_serves_orders_loaded_at_startup(self, repository, make_order):
        repository.save_order(make_order("o1"))
        service = OrderService(repository)
        service.load()

        orders = _client_for(service).get("/get_orders").json()

        assert orders == [order_payload("o1")]
