from __future__ import annotations

from fastapi.testclient import TestClient

from secure_error_api.app.server import create_app


def test_docs_are_served_in_development(make_settings) -> None:
    client = TestClient(create_app(make_settings(environment="development")))

    assert client.get("/docs").status_code == 200
    assert client.get("/redoc").status_code == 200

    schema = client.get("/openapi.json").json()
    assert "/api/error/trigger" in schema["paths"]


def test_docs_are_hidden_in_production(make_settings) -> None:
    client = TestClient(create_app(make_settings(environment="production")))

    assert client.get("/docs").status_code == 404
    assert client.get("/redoc").status_code == 404
    assert client.get("/openapi.json").status_code == 404
