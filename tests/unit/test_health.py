from __future__ import annotations


def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["service"] == "emargement"


def test_correlation_id_is_propagated(client):
    response = client.get("/health", headers={"x-correlation-id": "cid-123"})
    assert response.headers["x-correlation-id"] == "cid-123"
