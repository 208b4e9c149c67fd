"""
Tests for the FastAPI order API.

Tests: health, menu, order create/list/lookup/complete, error handling.
"""
import pytest

from canteen.main import create_app
from canteen.schemas import OrderStatus


def order_payload(**overrides) -> dict:
    payload = {
        "items": [
            {
                "id": "veg-spring-rolls",
                "name": "Veg Spring Rolls",
                "description": "Crispy rolls",
                "price": 4.5,
                "image": "/images/veg-spring-rolls.jpg",
                "category": "Starters",
                "quantity": 2,
            }
        ],
        "customerName": "Jo",
        "customerPhone": "555-0100",
        "total": 9.0,
    }
    payload.update(overrides)
    return payload


class TestSystemEndpoints:

    @pytest.mark.integration
    def test_root(self, test_client):
        response = test_client.get("/")
        assert response.status_code == 200
        assert response.json()["orders"] == "/api/orders"

    @pytest.mark.integration
    def test_health_counts_orders(self, test_client, api_store):
        api_store.create_order([], "Jo", "1", 1.0)

        response = test_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "operational"
        assert data["environment"] == "development"
        assert data["orders"] == 1


class TestMenuEndpoints:

    @pytest.mark.integration
    def test_full_menu_covers_every_category(self, test_client):
        response = test_client.get("/api/menu")

        assert response.status_code == 200
        categories = {item["category"] for item in response.json()}
        assert categories == {"Starters", "Heavy Snacks", "Rice & Noodles", "Sides"}

    @pytest.mark.integration
    def test_filter_by_category(self, test_client):
        response = test_client.get("/api/menu", params={"category": "Rice & Noodles"})

        assert response.status_code == 200
        items = response.json()
        assert items
        assert all(item["category"] == "Rice & Noodles" for item in items)

    @pytest.mark.integration
    def test_unknown_category_is_rejected(self, test_client):
        response = test_client.get("/api/menu", params={"category": "Desserts"})
        assert response.status_code == 422

    @pytest.mark.integration
    def test_menu_item_lookup(self, test_client):
        assert test_client.get("/api/menu/raita").json()["name"] == "Cucumber Raita"
        assert test_client.get("/api/menu/nope").status_code == 404


class TestOrderEndpoints:

    @pytest.mark.integration
    def test_create_order(self, test_client, api_store):
        response = test_client.post("/api/orders", json=order_payload())

        assert response.status_code == 201
        data = response.json()
        assert data["customerName"] == "Jo"
        assert data["customerPhone"] == "555-0100"
        assert data["total"] == 9.0
        assert data["status"] == "new"
        assert data["token"].isdigit() and len(data["token"]) == 4
        assert data["items"][0]["quantity"] == 2
        assert api_store.get_orders()[0].token == data["token"]

    @pytest.mark.integration
    def test_snake_case_body_is_accepted(self, test_client):
        payload = order_payload()
        payload["customer_name"] = payload.pop("customerName")
        payload["customer_phone"] = payload.pop("customerPhone")

        response = test_client.post("/api/orders", json=payload)

        assert response.status_code == 201
        assert response.json()["customerName"] == "Jo"

    @pytest.mark.integration
    def test_garbage_values_pass_through(self, test_client):
        response = test_client.post(
            "/api/orders",
            json=order_payload(items=[], total=-1, customerPhone="call me"),
        )

        assert response.status_code == 201
        assert response.json()["total"] == -1

    @pytest.mark.integration
    def test_wrong_shape_is_rejected(self, test_client):
        response = test_client.post("/api/orders", json={"customerName": "Jo"})
        assert response.status_code == 422

    @pytest.mark.integration
    def test_list_is_most_recent_first(self, test_client):
        tokens = []
        for name in ("A", "B", "C"):
            response = test_client.post("/api/orders", json=order_payload(customerName=name))
            tokens.append(response.json()["token"])

        listed = test_client.get("/api/orders").json()

        assert [o["customerName"] for o in listed] == ["C", "B", "A"]
        assert [o["token"] for o in listed] == list(reversed(tokens))

    @pytest.mark.integration
    def test_get_order_by_token(self, test_client):
        token = test_client.post("/api/orders", json=order_payload()).json()["token"]

        assert test_client.get(f"/api/orders/{token}").json()["token"] == token
        assert test_client.get("/api/orders/0000").status_code == 404

    @pytest.mark.integration
    def test_complete_order(self, test_client, api_store):
        token = test_client.post("/api/orders", json=order_payload()).json()["token"]

        response = test_client.post(f"/api/orders/{token}/complete")

        assert response.status_code == 200
        assert response.json() == {"token": token, "found": True}
        assert api_store.find(token).status == OrderStatus.COMPLETED

    @pytest.mark.integration
    def test_complete_unknown_token(self, test_client, api_store):
        test_client.post("/api/orders", json=order_payload())

        response = test_client.post("/api/orders/0000/complete")

        assert response.status_code == 200
        assert response.json() == {"token": "0000", "found": False}
        assert all(o.status == OrderStatus.NEW for o in api_store.get_orders())

    @pytest.mark.integration
    def test_complete_with_token_in_body(self, test_client, api_store):
        token = test_client.post("/api/orders", json=order_payload()).json()["token"]

        response = test_client.post("/api/orders/complete", json={"token": token})

        assert response.status_code == 200
        assert response.json() == {"token": token, "found": True}
        assert api_store.find(token).status == OrderStatus.COMPLETED

    @pytest.mark.integration
    @pytest.mark.parametrize("token", ["", "12/34", "12?x"])
    def test_body_route_accepts_any_token(self, test_client, api_store, token):
        test_client.post("/api/orders", json=order_payload())

        response = test_client.post("/api/orders/complete", json={"token": token})

        assert response.status_code == 200
        assert response.json() == {"token": token, "found": False}
        assert all(o.status == OrderStatus.NEW for o in api_store.get_orders())


class TestAppOwnership:

    @pytest.mark.integration
    def test_each_app_owns_its_store(self):
        from fastapi.testclient import TestClient

        first, second = create_app(), create_app()
        with TestClient(first) as a, TestClient(second) as b:
            a.post("/api/orders", json=order_payload())
            assert len(a.get("/api/orders").json()) == 1
            assert b.get("/api/orders").json() == []

    @pytest.mark.integration
    def test_unhandled_errors_become_500(self, api_store, monkeypatch):
        from fastapi.testclient import TestClient

        def explode():
            raise RuntimeError("store is on fire")

        monkeypatch.setattr(api_store, "get_orders", explode)
        app = create_app(store=api_store)

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/api/orders")

        assert response.status_code == 500
        assert response.json()["error"] == "Internal Server Error"
        assert response.json()["detail"] == "An unexpected error occurred"
