"""
Customer Model Service
Tests — application factory, health, error envelope and request middleware.
"""

import pytest

from customer_model import create_app
from customer_model.config import config
from customer_model.services import profile_service


# ═════════════════════════════════════════════════════════════════════════════
# HEALTH
# ═════════════════════════════════════════════════════════════════════════════

def test_health_ready(client):
    res = client.get("/api/v1/health")
    assert res.status_code == 200
    assert res.get_json() == {"status": "ok", "app": "Customer Model Service"}


def test_health_live_checks_database(client):
    res = client.get("/api/v1/health/live")
    assert res.status_code == 200
    data = res.get_json()
    assert data["status"] == "healthy"
    assert data["checks"]["database"]["status"] == "ok"
    assert data["checks"]["app"]["testing"] is True


# ═════════════════════════════════════════════════════════════════════════════
# ERROR ENVELOPE
# ═════════════════════════════════════════════════════════════════════════════

def test_unknown_route_is_json_404(client):
    res = client.get("/api/v1/nothing-here")
    assert res.status_code == 404
    body = res.get_json()
    assert body["code"] == "ERR_NOT_FOUND"
    assert body["path"] == "/api/v1/nothing-here"


@pytest.mark.parametrize("method, path", [
    ("patch", "/api/v1/profiles/novice"),
    ("post", "/api/v1/profiles/novice"),
    ("delete", "/api/v1/vocabularies"),
    ("post", "/api/v1/customer-model"),
])
def test_unhandled_method_is_405(client, method, path):
    res = getattr(client, method)(path, json={})
    assert res.status_code == 405
    assert res.get_json()["code"] == "ERR_METHOD_NOT_ALLOWED"


def test_non_json_body_rejected(client):
    res = client.post("/api/v1/profiles", data="profile_key=x", content_type="text/plain")
    assert res.status_code == 415


def test_malformed_json_treated_as_empty_body(client):
    res = client.post("/api/v1/profiles", data="{not json", content_type="application/json")
    assert res.status_code == 400
    assert res.get_json()["error"] == "profile_key and display_name are required"


def test_unexpected_error_returns_500_with_detail(client, monkeypatch):
    def _boom():
        raise RuntimeError("connection reset")

    monkeypatch.setattr(profile_service, "list_profiles", _boom)
    res = client.get("/api/v1/profiles")
    assert res.status_code == 500
    assert res.get_json() == {"error": "Internal server error", "detail": "connection reset"}


# ═════════════════════════════════════════════════════════════════════════════
# REQUEST TIMING
# ═════════════════════════════════════════════════════════════════════════════

def test_request_id_echoed(client):
    res = client.get("/api/v1/profiles", headers={"X-Request-ID": "abc123"})
    assert res.headers["X-Request-ID"] == "abc123"
    assert float(res.headers["X-Request-Duration-Ms"]) >= 0


def test_request_id_generated(client):
    res = client.get("/api/v1/profiles")
    assert len(res.headers["X-Request-ID"]) == 12


# ═════════════════════════════════════════════════════════════════════════════
# FACTORY / CONFIG
# ═════════════════════════════════════════════════════════════════════════════

@pytest.fixture()
def no_db_env(monkeypatch):
    for name in ("DATABASE_URL", "DB_HOST", "DB_SECRET_PROJECT"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_testing_config(app):
    assert app.config["TESTING"] is True
    assert app.config["SQLALCHEMY_DATABASE_URI"].startswith("sqlite")
    assert app.config["SQLALCHEMY_ENGINE_OPTIONS"] == {}


def test_production_without_database_fails_fast(no_db_env):
    with pytest.raises(RuntimeError, match="Database is not configured"):
        create_app("production")


def test_database_url_env_is_used(no_db_env):
    no_db_env.setenv("DATABASE_URL", "sqlite:///:memory:")
    prod = create_app("production")
    assert prod.config["SQLALCHEMY_DATABASE_URI"] == "sqlite:///:memory:"
    assert prod.config["SQLALCHEMY_ENGINE_OPTIONS"] == {}
    assert prod.debug is False


# ═════════════════════════════════════════════════════════════════════════════
# CORS
# ═════════════════════════════════════════════════════════════════════════════

ORIGIN = {"Origin": "https://console.example.com"}


@pytest.fixture()
def prod_env(no_db_env):
    no_db_env.setenv("DATABASE_URL", "sqlite:///:memory:")
    return no_db_env


def test_cors_open_outside_production(client):
    res = client.get("/api/v1/health", headers=ORIGIN)
    assert res.headers["Access-Control-Allow-Origin"] == "*"


def test_production_without_origins_allows_no_cross_origin(prod_env):
    prod_env.setattr(config["production"], "CORS_ORIGINS", "")
    res = create_app("production").test_client().get("/api/v1/health", headers=ORIGIN)
    assert res.status_code == 200
    assert "Access-Control-Allow-Origin" not in res.headers


def test_production_allows_listed_origins_only(prod_env):
    prod_env.setattr(config["production"], "CORS_ORIGINS", "https://console.example.com")
    client = create_app("production").test_client()

    allowed = client.get("/api/v1/health", headers=ORIGIN)
    assert allowed.headers["Access-Control-Allow-Origin"] == "https://console.example.com"

    other = client.get("/api/v1/health", headers={"Origin": "https://evil.example.com"})
    assert "Access-Control-Allow-Origin" not in other.headers
