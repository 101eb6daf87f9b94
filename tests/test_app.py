"""
Tests de la capa HTTP transversal: health, 404, OPTIONS, CORS y rate limit.
"""
from hdnotes.core.config import settings
from hdnotes.infrastructure.db import mongo


def test_health_reports_connected_store(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Server is running"
    assert body["mongodb"] == "connected"
    assert body["environment"] == "test"
    assert body["timestamp"]


def test_health_reports_disconnected_store(client, monkeypatch):
    monkeypatch.setattr(mongo, "_db", None)
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json()["mongodb"] == "disconnected"


def test_unmatched_route(client):
    r = client.get("/api/does-not-exist")
    assert r.status_code == 404
    assert r.json() == {"message": "Route not found"}


def test_options_on_any_route(client):
    r = client.options("/api/notes/anything")
    assert r.status_code == 200
    assert r.content == b""


def test_cors_headers_for_allowed_origin(client):
    r = client.get("/api/health", headers={"Origin": "http://localhost:3000"})
    assert r.headers["access-control-allow-origin"] == "http://localhost:3000"
    assert r.headers["access-control-allow-credentials"] == "true"


def test_cors_preflight(client):
    r = client.options(
        "/api/notes",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Authorization",
        },
    )
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "http://localhost:3000"


def test_cors_ignores_unknown_origin(client):
    r = client.get("/api/health", headers={"Origin": "http://evil.example"})
    assert "access-control-allow-origin" not in r.headers


def test_rate_limit(client, monkeypatch):
    monkeypatch.setattr(settings, "rate_limit_requests", 2)
    assert client.get("/api/health").status_code == 200
    assert client.get("/api/health").status_code == 200
    r = client.get("/api/health")
    assert r.status_code == 429
    assert r.json()["message"] == "Too many requests from this IP, please try again later."


def test_request_id_is_echoed(client):
    r = client.get("/api/health", headers={"X-Request-Id": "abc123"})
    assert r.headers["x-request-id"] == "abc123"
