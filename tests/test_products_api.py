# tests/test_products_api.py
import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.database import ProductStore
from app.main import WELCOME_MESSAGE, create_app


def test_root_welcome(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.text == WELCOME_MESSAGE
    assert r.headers["content-type"].startswith("text/plain")


def test_list_returns_seed_data(client):
    r = client.get("/api/products")
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["count"] == 3
    assert [p["name"] for p in body["data"]] == ["Laptop", "Smartphone", "Coffee Maker"]


def test_list_is_empty_without_seed():
    client = TestClient(create_app(settings=Settings(seed_products=False)))
    assert client.get("/api/products").json() == {"success": True, "count": 0, "data": []}


def test_get_by_id(client):
    r = client.get("/api/products/2")
    assert r.status_code == 200
    assert r.json() == {
        "success": True,
        "data": {
            "id": "2",
            "name": "Smartphone",
            "description": "Latest model with 128GB storage",
            "price": 800,
            "category": "electronics",
            "inStock": True,
        },
    }


def test_get_unknown_id(client):
    r = client.get("/api/products/does-not-exist")
    assert r.status_code == 404
    assert r.json() == {"success": False, "error": "Product not found", "code": "NOT_FOUND"}


def test_create_then_get_round_trip(client, store, auth_headers):
    payload = {"name": "Desk", "description": "Standing desk", "price": 350.5, "category": "furniture"}
    r = client.post("/api/products", json=payload, headers=auth_headers)
    assert r.status_code == 201
    created = r.json()["data"]
    assert created["id"]
    assert created["inStock"] is False
    for key, value in payload.items():
        assert created[key] == value

    fetched = client.get(f"/api/products/{created['id']}").json()["data"]
    assert fetched == created
    assert len(store) == 4


def test_create_generates_distinct_ids(client, auth_headers):
    existing = {p["id"] for p in client.get("/api/products").json()["data"]}
    for i in range(5):
        r = client.post("/api/products", json={"name": f"Item {i}", "price": 1 + i}, headers=auth_headers)
        new_id = r.json()["data"]["id"]
        assert new_id and new_id not in existing
        existing.add(new_id)


def test_create_ignores_client_id(client, auth_headers):
    r = client.post("/api/products", json={"id": "1", "name": "Clone", "price": 10}, headers=auth_headers)
    assert r.status_code == 201
    assert r.json()["data"]["id"] != "1"
    assert client.get("/api/products/1").json()["data"]["name"] == "Laptop"


def test_create_keeps_in_stock_flag(client, auth_headers):
    r = client.post("/api/products", json={"name": "Kettle", "price": 30, "inStock": True}, headers=auth_headers)
    assert r.json()["data"]["inStock"] is True


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "Zero", "price": 0},
        {"name": "Negative", "price": -5},
        {"name": "Text", "price": "abc"},
        {"name": "Flag", "price": True},
        {"price": 10},
        {"name": "", "price": 10},
        {"name": "No price"},
        {"name": "Null price", "price": None},
        {"name": "Huge", "price": int("9" * 400)},
        {"name": "Zero text", "price": "0"},
        {"name": "Negative text", "price": "-5"},
    ],
)
def test_create_validation_errors(client, store, auth_headers, payload):
    r = client.post("/api/products", json=payload, headers=auth_headers)
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["code"] == "VALIDATION_ERROR"
    assert len(store) == 3


def test_create_accepts_numeric_string_price(client, auth_headers):
    r = client.post("/api/products", json={"name": "Stool", "price": "12"}, headers=auth_headers)
    assert r.status_code == 201
    assert r.json()["data"]["price"] == 12.0

    body = client.get("/api/products", params={"maxPrice": "20"}).json()
    assert [p["name"] for p in body["data"]] == ["Stool"]


def test_seed_prices_are_integers(client):
    prices = [p["price"] for p in client.get("/api/products").json()["data"]]
    assert prices == [1200, 800, 50]
    assert all(isinstance(p, int) for p in prices)
    assert '"price":800,' in client.get("/api/products/2").text


def test_create_rejects_non_object_body(client, auth_headers):
    r = client.post("/api/products", json=[{"name": "A", "price": 1}], headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["code"] == "VALIDATION_ERROR"


def test_create_rejects_malformed_json(client, auth_headers):
    headers = {**auth_headers, "Content-Type": "application/json"}
    r = client.post("/api/products", content=b"{not json", headers=headers)
    assert r.status_code == 400
    assert r.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.parametrize("headers", [{}, {"Authorization": "Token abc"}, {"Authorization": "bearer abc"}])
def test_writes_require_bearer_marker(client, store, headers):
    before = store.list()
    responses = [
        client.post("/api/products", json={"name": "Desk", "price": 10}, headers=headers),
        client.put("/api/products/1", json={"name": "Desk", "price": 10}, headers=headers),
        client.delete("/api/products/1", headers=headers),
    ]
    for r in responses:
        assert r.status_code == 401
        assert r.json() == {"success": False, "error": "Authentication required", "code": "UNAUTHORIZED"}
    assert store.list() == before


def test_auth_is_checked_before_validation_and_lookup(client):
    assert client.post("/api/products", json={"price": -1}).status_code == 401
    assert client.put("/api/products/missing", json={}).status_code == 401
    assert client.delete("/api/products/missing").status_code == 401


def test_update_merges_and_preserves_id(client, auth_headers):
    r = client.put(
        "/api/products/1",
        json={"id": "999", "name": "Laptop Pro", "price": 1500, "color": "silver"},
        headers=auth_headers,
    )
    assert r.status_code == 200
    updated = r.json()["data"]
    assert updated["id"] == "1"
    assert updated["name"] == "Laptop Pro"
    assert updated["price"] == 1500
    assert updated["color"] == "silver"
    assert updated["description"] == "High-performance laptop with 16GB RAM"
    assert client.get("/api/products/1").json()["data"] == updated
    assert client.get("/api/products/999").status_code == 404


def test_update_keeps_position_in_list(client, auth_headers):
    client.put("/api/products/1", json={"name": "Laptop Pro", "price": 1500}, headers=auth_headers)
    names = [p["name"] for p in client.get("/api/products").json()["data"]]
    assert names == ["Laptop Pro", "Smartphone", "Coffee Maker"]


def test_update_validates_payload(client, store, auth_headers):
    before = store.get("2")
    r = client.put("/api/products/2", json={"name": "Smartphone", "price": 0}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["code"] == "VALIDATION_ERROR"
    assert store.get("2") == before


def test_update_unknown_id(client, auth_headers):
    r = client.put("/api/products/nope", json={"name": "X", "price": 1}, headers=auth_headers)
    assert r.status_code == 404
    assert r.json()["code"] == "NOT_FOUND"


def test_delete_then_get_and_delete_again(client, store, auth_headers):
    r = client.delete("/api/products/3", headers=auth_headers)
    assert r.status_code == 200
    assert r.json() == {"success": True, "data": {}}
    assert len(store) == 2

    assert client.get("/api/products/3").json()["code"] == "NOT_FOUND"
    again = client.delete("/api/products/3", headers=auth_headers)
    assert again.status_code == 404
    assert again.json()["code"] == "NOT_FOUND"


def test_filter_price_range(client):
    body = client.get("/api/products", params={"minPrice": "100", "maxPrice": "900"}).json()
    assert body["count"] == 1
    assert body["data"][0]["name"] == "Smartphone"


def test_filter_category_is_case_insensitive(client):
    for category in ("kitchen", "KITCHEN", "Kitchen"):
        body = client.get("/api/products", params={"category": category}).json()
        assert [p["name"] for p in body["data"]] == ["Coffee Maker"]


def test_filter_in_stock(client):
    in_stock = client.get("/api/products?inStock=true").json()
    assert in_stock["count"] == 2
    assert {p["name"] for p in in_stock["data"]} == {"Laptop", "Smartphone"}

    out_of_stock = client.get("/api/products?inStock=false").json()
    assert [p["name"] for p in out_of_stock["data"]] == ["Coffee Maker"]


def test_filter_in_stock_matches_booleans_only(client, auth_headers):
    client.put("/api/products/3", json={"name": "Coffee Maker", "price": 50, "inStock": "yes"}, headers=auth_headers)
    assert [p["name"] for p in client.get("/api/products?inStock=true").json()["data"]] == ["Laptop", "Smartphone"]
    assert client.get("/api/products?inStock=false").json()["count"] == 0


def test_filter_name_substring_and_combined(client):
    assert client.get("/api/products?name=PHONE").json()["count"] == 1
    body = client.get("/api/products?category=electronics&maxPrice=1000&name=o").json()
    assert [p["name"] for p in body["data"]] == ["Smartphone"]
    assert client.get("/api/products?category=garden").json() == {"success": True, "count": 0, "data": []}


def test_filter_rejects_non_numeric_bound(client):
    r = client.get("/api/products?minPrice=cheap")
    assert r.status_code == 400
    assert r.json()["code"] == "VALIDATION_ERROR"


def test_unmatched_route(client):
    r = client.get("/api/orders")
    assert r.status_code == 404
    assert r.json() == {"success": False, "error": "Endpoint not found", "code": "NOT_FOUND"}


def test_unsupported_method_is_not_found(client, auth_headers):
    r = client.patch("/api/products/1", json={"price": 5}, headers=auth_headers)
    assert r.status_code == 404
    assert r.json()["code"] == "NOT_FOUND"


def test_request_id_header(client):
    assert client.get("/api/products").headers.get("X-Request-ID")


class BrokenStore(ProductStore):
    def list(self):
        raise RuntimeError("boom")


def test_unhandled_error_returns_server_error_envelope():
    client = TestClient(create_app(store=BrokenStore()), raise_server_exceptions=False)
    r = client.get("/api/products")
    assert r.status_code == 500
    assert r.json() == {"success": False, "error": "Internal server error", "code": "SERVER_ERROR"}
