from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from food_inventory.core.config import Settings
from food_inventory.main import app, create_app


def get_count(method: str, path: str, status_code: str) -> float:
    return (
        REGISTRY.get_sample_value(
            "http_requests_total", {"method": method, "path": path, "status_code": status_code}
        )
        or 0.0
    )


def test_request_count_middleware() -> None:
    client = TestClient(app)
    initial = get_count("GET", "/healthz", "200")

    response = client.get("/healthz")
    assert response.status_code == 200

    final = get_count("GET", "/healthz", "200")
    assert final == initial + 1


def test_request_count_uses_route_template(client: TestClient, alice_headers: dict) -> None:
    initial = get_count("GET", "/api/v1/products/{barcode}", "404")

    assert client.get("/api/v1/products/11", headers=alice_headers).status_code == 404
    assert client.get("/api/v1/products/22", headers=alice_headers).status_code == 404

    assert get_count("GET", "/api/v1/products/{barcode}", "404") == initial + 2
    assert get_count("GET", "/api/v1/products/11", "404") == 0.0


def test_metrics_endpoint_unauthenticated() -> None:
    client = TestClient(app)
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "http_requests_total" in response.text
    assert "product_searches_total" in response.text


def test_readyz_reports_storage_once_started(client: TestClient) -> None:
    response = client.get("/readyz")
    assert response.status_code == 200
    assert response.json() == {"status": "ready", "storage": "sqlite"}


def test_readyz_is_503_before_startup(test_settings: Settings) -> None:
    # Ohne Context-Manager läuft der lifespan nicht
    client = TestClient(create_app(test_settings))
    assert client.get("/readyz").status_code == 503
