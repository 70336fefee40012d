# tests/test_write_products.py
AUTH = {"x-api-key": "mysecretapikey"}
UNAUTHORIZED = {"message": "Unauthorized: Invalid API Key"}


def test_create_without_key_is_rejected(client, store):
    r = client.post("/api/products", json={"name": "Desk", "price": 150})
    assert r.status_code == 401
    assert r.json() == UNAUTHORIZED
    assert len(store) == 3


def test_create_with_wrong_key_is_rejected(client, store):
    r = client.post("/api/products", json={"name": "Desk", "price": 150}, headers={"x-api-key": "nope"})
    assert r.status_code == 401
    assert r.json() == UNAUTHORIZED
    assert len(store) == 3


def test_create_assigns_fresh_id(client, store):
    before = {p.id for p in store.list()}
    r = client.post("/api/products", json={"name": "Desk", "price": 150}, headers=AUTH)
    assert r.status_code == 201
    body = r.json()
    assert body["id"] not in before
    assert body["name"] == "Desk"
    assert body["price"] == 150
    assert body["category"] == "general"
    assert body["inStock"] is True
    assert len(store) == 4
    assert client.get(f"/api/products/{body['id']}").json() == body


def test_create_ignores_client_id_and_unknown_fields(client):
    r = client.post(
        "/api/products",
        json={"id": "1", "name": "Desk", "price": 9.5, "category": "Furniture", "colour": "red"},
        headers=AUTH,
    )
    assert r.status_code == 201
    body = r.json()
    assert body["id"] != "1"
    assert body["price"] == 9.5
    assert "colour" not in body
    assert client.get("/api/products?category=furniture").json() == [body]


def test_create_ids_are_unique(client):
    created = [
        client.post("/api/products", json={"name": f"P{i}", "price": i + 1}, headers=AUTH).json()["id"]
        for i in range(20)
    ]
    assert len(set(created)) == 20


def test_create_rejects_bad_price(client, store):
    for price in (-5, 0, "10", True, None):
        r = client.post("/api/products", json={"name": "Desk", "price": price}, headers=AUTH)
        assert r.status_code == 400
        assert r.json() == {"error": {"message": "Price must be a positive number.", "status": 400}}
    assert len(store) == 3


def test_create_rejects_bad_name(client, store):
    for body in ({"price": 10}, {"name": "", "price": 10}, {"name": 42, "price": 10}):
        r = client.post("/api/products", json=body, headers=AUTH)
        assert r.status_code == 400
        assert r.json()["error"]["message"] == "Name must be a non-empty string."
    assert len(store) == 3


def test_create_rejects_wrongly_typed_optional_field(client, store):
    r = client.post("/api/products", json={"name": "Desk", "price": 10, "category": 5}, headers=AUTH)
    assert r.status_code == 400
    assert "category" in r.json()["error"]["message"]
    assert len(store) == 3


def test_malformed_json_is_400_before_auth(client, store):
    r = client.post(
        "/api/products",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json() == {"error": {"message": "Malformed JSON body.", "status": 400}}

    r = client.post("/api/products", json=["a", "list"], headers=AUTH)
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Request body must be a JSON object."
    assert len(store) == 3


def test_auth_is_checked_before_validation(client):
    r = client.post("/api/products", json={"name": "", "price": -1})
    assert r.status_code == 401


def test_update_merges_and_pins_id(client, store):
    r = client.put(
        "/api/products/1",
        json={"id": "hijack", "name": "Laptop Pro", "price": 1500},
        headers=AUTH,
    )
    assert r.status_code == 200
    body = r.json()
    assert body["id"] == "1"
    assert body["name"] == "Laptop Pro"
    assert body["price"] == 1500
    # untouched fields survive
    assert body["description"] == "Powerful laptop for all your needs."
    assert body["category"] == "electronics"
    assert [p.id for p in store.list()] == ["1", "2", "3"]
    assert client.get("/api/products/hijack").status_code == 404
    assert client.get("/api/products/1").json() == body


def test_update_requires_key_and_valid_body(client):
    r = client.put("/api/products/1", json={"name": "X", "price": 1})
    assert r.status_code == 401
    assert r.json() == UNAUTHORIZED

    r = client.put("/api/products/1", json={"name": "X"}, headers=AUTH)
    assert r.status_code == 400
    assert client.get("/api/products/1").json()["name"] == "Laptop"


def test_update_missing_product_is_404(client):
    r = client.put("/api/products/999", json={"name": "X", "price": 1}, headers=AUTH)
    assert r.status_code == 404
    assert r.json() == {"error": {"message": "Product not found.", "status": 404}}


def test_delete_then_get_is_404(client, store):
    r = client.delete("/api/products/2", headers=AUTH)
    assert r.status_code == 204
    assert r.content == b""
    assert len(store) == 2
    assert client.get("/api/products/2").status_code == 404
    assert client.get("/api/products/stats").json() == {"electronics": 2}


def test_delete_requires_key(client, store):
    r = client.delete("/api/products/2")
    assert r.status_code == 401
    assert r.json() == UNAUTHORIZED
    assert len(store) == 3


def test_delete_missing_product_is_404(client):
    r = client.delete("/api/products/999", headers=AUTH)
    assert r.status_code == 404
    assert r.json()["error"]["status"] == 404


def test_create_accepts_huge_integer_price(client, store):
    huge = 10 ** 400
    r = client.post(
        "/api/products",
        content=b'{"name": "Desk", "price": ' + str(huge).encode() + b"}",
        headers={**AUTH, "content-type": "application/json"},
    )
    assert r.status_code == 201
    assert r.json()["price"] == huge
    assert len(store) == 4


def test_update_accepts_huge_integer_price(client):
    r = client.put(
        "/api/products/1",
        content=b'{"name": "Laptop", "price": 1' + b"0" * 400 + b"}",
        headers={**AUTH, "content-type": "application/json"},
    )
    assert r.status_code == 200
    assert r.json()["price"] == 10 ** 400


def test_in_stock_must_be_a_real_boolean(client, store):
    for value in ("yes", "off", "true", 1, 0):
        r = client.post("/api/products", json={"name": "Desk", "price": 5, "inStock": value}, headers=AUTH)
        assert r.status_code == 400
        assert "inStock" in r.json()["error"]["message"]
    assert len(store) == 3

    r = client.put("/api/products/1", json={"name": "Laptop", "price": 5, "inStock": 1}, headers=AUTH)
    assert r.status_code == 400
    assert client.get("/api/products/1").json()["inStock"] is True
