"""HTTP surface: status codes, auth and camelCase payloads end to end."""
import pytest


@pytest.fixture
def phone(make_product):
    return make_product(name="Phone", price=1299.0, stock=2, category="smartphones")


def _checkout(client, headers, **extra):
    body = {"shippingAddress": "123 Nguyen Hue, District 1", "paymentMethod": "COD"}
    body.update(extra)
    return client.post("/api/orders", json=body, headers=headers)


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.parametrize(
    "method, path",
    [
        ("get", "/api/cart"),
        ("post", "/api/orders"),
        ("get", "/api/orders"),
        ("get", "/api/auth/me"),
    ],
)
def test_routes_require_authentication(client, method, path):
    response = getattr(client, method)(path)
    assert response.status_code == 401


def test_invalid_token_is_rejected(client):
    response = client.get("/api/cart", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_register_and_login(client):
    response = client.post(
        "/api/auth/register",
        json={
            "username": "carol",
            "email": "carol@example.com",
            "password": "secret",
            "fullName": "Carol",
            "role": "seller",
        },
    )
    assert response.status_code == 201
    assert response.json()["fullName"] == "Carol"
    assert response.json()["role"] == "seller"

    duplicate = client.post(
        "/api/auth/register",
        json={"username": "carol2", "email": "carol@example.com", "password": "x"},
    )
    assert duplicate.status_code == 409

    login = client.post(
        "/api/auth/login", json={"email": "carol@example.com", "password": "secret"}
    )
    assert login.status_code == 200
    token = login.json()["accessToken"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["email"] == "carol@example.com"


def test_login_unknown_email(client, users):
    response = client.post(
        "/api/auth/login", json={"email": "nobody@example.com", "password": "x"}
    )
    assert response.status_code == 401


def test_cart_endpoints(client, auth_headers, phone):
    headers = auth_headers("alice")

    created = client.post("/api/cart", json={"productId": phone.id, "quantity": 1}, headers=headers)
    assert created.status_code == 201
    item = created.json()
    assert item["productId"] == phone.id
    assert item["name"] == "Phone"
    assert item["lineTotal"] == 1299.0

    listed = client.get("/api/cart", headers=headers).json()
    assert [(it["id"], it["quantity"], it["stock"]) for it in listed] == [(item["id"], 1, 2)]

    updated = client.put(f"/api/cart/{item['id']}", json={"quantity": 2}, headers=headers)
    assert updated.status_code == 200
    assert updated.json()["quantity"] == 2

    zero = client.put(f"/api/cart/{item['id']}", json={"quantity": 0}, headers=headers)
    assert zero.status_code == 400

    too_many = client.put(f"/api/cart/{item['id']}", json={"quantity": 3}, headers=headers)
    assert too_many.status_code == 409
    assert too_many.json()["detail"] == {
        "message": "Insufficient stock",
        "productId": phone.id,
        "available": 2,
    }

    foreign = client.delete(f"/api/cart/{item['id']}", headers=auth_headers("bob"))
    assert foreign.status_code == 404

    removed = client.delete(f"/api/cart/{item['id']}", headers=headers)
    assert removed.status_code == 200
    assert client.get("/api/cart", headers=headers).json() == []


def test_add_to_cart_validation(client, auth_headers, phone):
    headers = auth_headers("alice")

    assert client.post("/api/cart", json={"quantity": 1}, headers=headers).status_code == 400
    assert client.post(
        "/api/cart", json={"productId": phone.id, "quantity": 0}, headers=headers
    ).status_code == 400
    assert client.post(
        "/api/cart", json={"productId": 9999, "quantity": 1}, headers=headers
    ).status_code == 404
    assert client.post(
        "/api/cart", json={"productId": phone.id, "quantity": 3}, headers=headers
    ).status_code == 409


def test_checkout_flow(client, auth_headers, phone):
    alice = auth_headers("alice")
    client.post("/api/cart", json={"productId": phone.id, "quantity": 2}, headers=alice)

    response = _checkout(
        client,
        alice,
        note="Leave at the door",
        items=[{"productId": phone.id, "quantity": 1, "price": 1}],
    )

    assert response.status_code == 201
    order = response.json()["order"]
    assert order["status"] == "pending"
    assert order["totalAmount"] == 2598.0
    assert order["note"] == "Leave at the door"
    assert [(it["productId"], it["quantity"], it["price"]) for it in order["items"]] == [
        (phone.id, 2, 1299.0)
    ]
    assert client.get("/api/cart", headers=alice).json() == []
    assert client.get(f"/api/products/{phone.id}").json()["stock"] == 0

    mine = client.get("/api/orders", headers=alice).json()
    assert [o["id"] for o in mine] == [order["id"]]
    assert client.get(f"/api/orders/{order['id']}", headers=alice).status_code == 200
    assert client.get(f"/api/orders/{order['id']}", headers=auth_headers("bob")).status_code == 403
    assert client.get(f"/api/orders/{order['id']}", headers=auth_headers("seller")).status_code == 200
    assert client.get("/api/orders/9999", headers=alice).status_code == 404


def test_checkout_errors(client, auth_headers, phone):
    alice, bob = auth_headers("alice"), auth_headers("bob")

    empty = _checkout(client, alice)
    assert empty.status_code == 400

    missing_address = client.post("/api/orders", json={"paymentMethod": "COD"}, headers=alice)
    assert missing_address.status_code == 400

    client.post("/api/cart", json={"productId": phone.id, "quantity": 2}, headers=alice)
    client.post("/api/cart", json={"productId": phone.id, "quantity": 1}, headers=bob)
    assert _checkout(client, alice).status_code == 201

    conflict = _checkout(client, bob)
    assert conflict.status_code == 409
    assert conflict.json()["detail"]["productId"] == phone.id
    assert conflict.json()["detail"]["available"] == 0
    assert len(client.get("/api/cart", headers=bob).json()) == 1


def test_order_status_endpoint(client, auth_headers, phone):
    alice, seller = auth_headers("alice"), auth_headers("seller")
    client.post("/api/cart", json={"productId": phone.id, "quantity": 1}, headers=alice)
    order_id = _checkout(client, alice).json()["order"]["id"]
    url = f"/api/orders/{order_id}/status"

    assert client.put(url, json={"status": "processing"}, headers=alice).status_code == 403
    assert client.put(url, json={"status": "processing"}).status_code == 401
    assert client.put(url, json={"status": "lost"}, headers=seller).status_code == 400

    skipped = client.put(url, json={"status": "shipped"}, headers=seller)
    assert skipped.status_code == 400
    assert skipped.json()["detail"]["from"] == "pending"

    ok = client.put(url, json={"status": "processing"}, headers=seller)
    assert ok.status_code == 200
    assert ok.json() == {"orderId": order_id, "status": "processing"}

    cancelled = client.put(url, json={"status": "cancelled"}, headers=auth_headers("admin"))
    assert cancelled.status_code == 200
    assert client.get(f"/api/products/{phone.id}").json()["stock"] == 2

    again = client.put(url, json={"status": "cancelled"}, headers=seller)
    assert again.status_code == 400
    assert client.get(f"/api/products/{phone.id}").json()["stock"] == 2

    assert client.put("/api/orders/9999/status", json={"status": "processing"}, headers=seller).status_code == 404
