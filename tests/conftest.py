"""
Shared pytest fixtures for the Customer Model Service test suite.

Provides:
    - app: Flask application (session-scoped, in-memory SQLite)
    - _setup_db: Database table creation/teardown (session-scoped)
    - session: Per-test DB cleanup w/ rollback + recreate (autouse)
    - client: Flask test client (function-scoped)
    - vocabulary: Default dev / partner approaches seeded
    - profile, scenario: Pre-created entities via the API
"""

import pytest

from customer_model import create_app, shutdown_app
from customer_model.models import db as _db
from customer_model.services.seed_service import seed_default_vocabularies


# ── App & DB fixtures ────────────────────────────────────────────────────


@pytest.fixture(scope="session")
def app():
    """Create the Flask application once per test session."""
    application = create_app("testing")
    yield application
    shutdown_app(application)


@pytest.fixture(scope="session")
def _setup_db(app):
    """Create all tables at session start, drop at end."""
    with app.app_context():
        _db.create_all()
    yield
    with app.app_context():
        _db.drop_all()


@pytest.fixture(autouse=True)
def session(app, _setup_db):
    """Per-test: open app context, rollback after test, recreate tables."""
    with app.app_context():
        yield
        _db.session.rollback()
        _db.drop_all()
        _db.create_all()


@pytest.fixture()
def client(app):
    """Flask test client."""
    return app.test_client()


# ── Convenience fixtures ─────────────────────────────────────────────────


@pytest.fixture()
def vocabulary():
    """Seed the default approaches; returns the number created."""
    count = seed_default_vocabularies()
    _db.session.commit()
    return count


@pytest.fixture()
def profile(client):
    """Create and return the "novice" profile via the API."""
    res = client.post("/api/v1/profiles", json={
        "profile_key": "novice",
        "display_name": "Novice User",
    })
    assert res.status_code == 201
    return res.get_json()


@pytest.fixture()
def scenario(client, profile):
    """Create and return novice/onboarding via the API."""
    res = client.post(f"/api/v1/scenarios/{profile['profile_key']}", json={
        "scenario_key": "onboarding",
        "display_name": "Onboarding",
    })
    assert res.status_code == 201
    return res.get_json()
