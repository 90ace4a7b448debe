from datetime import datetime

from app.api.middleware import CORS_HEADERS


def test_health_check(test_client, fake_gemini):
    response = test_client.get("/api")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "OK"
    assert data["message"] == "Chat API is running"
    assert data["timestamp"].endswith("Z")
    datetime.fromisoformat(data["timestamp"].replace("Z", "+00:00"))
    assert fake_gemini.requests == []


def test_preflight(test_client):
    response = test_client.options(
        "/api",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
        },
    )

    assert response.status_code == 200
    assert response.content == b""
    for name, value in CORS_HEADERS.items():
        assert response.headers[name] == value


def test_cors_headers_on_every_response(test_client):
    for response in (test_client.get("/api"), test_client.get("/does-not-exist")):
        for name, value in CORS_HEADERS.items():
            assert response.headers[name] == value


def test_preflight_sets_headers_without_middleware():
    from fastapi import FastAPI
    from fastapi.testclient import TestClient

    from app.api.v1 import chat

    bare_app = FastAPI()
    bare_app.include_router(chat.router, prefix="/api")

    response = TestClient(bare_app).options("/api")

    assert response.status_code == 200
    assert response.content == b""
    for name, value in CORS_HEADERS.items():
        assert response.headers[name] == value
