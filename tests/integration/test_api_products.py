from fastapi.testclient import TestClient


def test_create_and_get_product(client: TestClient, alice_headers: dict):
    payload = {
        "barcode": "12345678",
        "name": "Pasta",
        "expiration_date": "31/12/24",
        "categories": ["vegano"],
    }
    response = client.post("/api/v1/products/", headers=alice_headers, json=payload)
    assert response.status_code == 201
    assert response.json() == payload

    response = client.get("/api/v1/products/12345678", headers=alice_headers)
    assert response.status_code == 200
    assert response.json()["name"] == "Pasta"

    response = client.get("/api/v1/products/", headers=alice_headers)
    assert [p["barcode"] for p in response.json()] == ["12345678"]


def test_create_duplicate_product_is_409(client: TestClient, alice_headers: dict):
    payload = {"barcode": "1", "name": "Pasta", "expiration_date": "31/12/24"}
    assert client.post("/api/v1/products/", headers=alice_headers, json=payload).status_code == 201

    response = client.post("/api/v1/products/", headers=alice_headers, json=payload)
    assert response.status_code == 409


def test_create_product_with_invalid_fields_is_422(client: TestClient, alice_headers: dict):
    for payload in (
        {"barcode": "123456789", "name": "Pasta", "expiration_date": "31/12/24"},
        {"barcode": "1", "name": "Pasta1", "expiration_date": "31/12/24"},
        {"barcode": "1", "name": "Pasta", "expiration_date": "2024-12-31"},
    ):
        response = client.post("/api/v1/products/", headers=alice_headers, json=payload)
        assert response.status_code == 422


def test_get_unknown_product_is_404(client: TestClient, alice_headers: dict):
    response = client.get("/api/v1/products/999", headers=alice_headers)
    assert response.status_code == 404


def test_delete_product_cascades_to_holdings(client: TestClient, alice_headers: dict):
    client.post(
        "/api/v1/products/",
        headers=alice_headers,
        json={"barcode": "1", "name": "Pasta", "expiration_date": "31/12/24"},
    )
    for location in ("fridge", "pantry"):
        client.post(
            f"/api/v1/holdings/{location}/",
            headers=alice_headers,
            json={"barcode": "1", "quantity": 1, "expiration_date": "2024-12-31"},
        )

    response = client.delete("/api/v1/products/1", headers=alice_headers)
    assert response.status_code == 204

    assert client.get("/api/v1/holdings/fridge/", headers=alice_headers).json() == []
    assert client.get("/api/v1/holdings/pantry/", headers=alice_headers).json() == []
    response = client.get("/api/v1/products/search?q=Pasta", headers=alice_headers)
    assert response.status_code == 404

    assert client.delete("/api/v1/products/1", headers=alice_headers).status_code == 404
