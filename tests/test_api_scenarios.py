"""
Customer Model Service
Tests — Scenario API.

Covers:
    - Create under a profile, defaults, composite-key scoping
    - Listing (all / per profile), unknown profile
    - Partial update, delete, key-required paths
"""

from contextlib import contextmanager

from sqlalchemy import event

from customer_model.models import db


@contextmanager
def _count_selects():
    statements = []

    def _record(conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().upper().startswith("SELECT"):
            statements.append(statement)

    event.listen(db.engine, "before_cursor_execute", _record)
    try:
        yield statements
    finally:
        event.remove(db.engine, "before_cursor_execute", _record)


def _create(client, profile_key, scenario_key, display_name="Scenario", **scores):
    return client.post(f"/api/v1/scenarios/{profile_key}", json={
        "scenario_key": scenario_key, "display_name": display_name, **scores,
    })


def _profile(client, key, name):
    res = client.post("/api/v1/profiles", json={"profile_key": key, "display_name": name})
    assert res.status_code == 201


# ═════════════════════════════════════════════════════════════════════════════
# CREATE / READ
# ═════════════════════════════════════════════════════════════════════════════

def test_create_scenario_defaults(client, profile):
    res = _create(client, "novice", "onboarding", "Onboarding")
    assert res.status_code == 201
    data = res.get_json()
    assert data["scenario_key"] == "onboarding"
    assert data["profile_key"] == "novice"
    assert data["profile_id"] == profile["id"]
    assert (data["importance"], data["complexity"], data["maturity"]) == (50, 50, 50)


def test_create_scenario_unknown_profile(client):
    res = _create(client, "ghost", "onboarding")
    assert res.status_code == 404
    assert res.get_json()["error"] == "Profile not found"


def test_create_scenario_missing_fields(client, profile):
    res = client.post("/api/v1/scenarios/novice", json={"display_name": "No key"})
    assert res.status_code == 400
    assert res.get_json()["details"] == {"scenario_key": "required"}


def test_create_scenario_duplicate_in_same_profile(client, scenario):
    res = _create(client, "novice", "onboarding", "Again")
    assert res.status_code == 409


def test_same_scenario_key_under_two_profiles(client, scenario):
    _profile(client, "expert", "Expert User")
    res = _create(client, "expert", "onboarding", "Expert Onboarding", importance=80)
    assert res.status_code == 201

    novice = client.get("/api/v1/scenarios/novice/onboarding").get_json()
    expert = client.get("/api/v1/scenarios/expert/onboarding").get_json()
    assert novice["id"] != expert["id"]
    assert novice["display_name"] == "Onboarding"
    assert expert["display_name"] == "Expert Onboarding"
    assert expert["importance"] == 80


def test_get_scenario_wrong_profile_is_not_found(client, scenario):
    _profile(client, "expert", "Expert User")
    res = client.get("/api/v1/scenarios/expert/onboarding")
    assert res.status_code == 404
    assert res.get_json()["error"] == "Scenario not found"


def test_list_scenarios_for_profile_ordered_by_key(client, profile):
    for key in ("zeta", "alpha", "mid"):
        _create(client, "novice", key)
    res = client.get("/api/v1/scenarios/novice")
    assert res.status_code == 200
    assert [s["scenario_key"] for s in res.get_json()] == ["alpha", "mid", "zeta"]


def test_list_scenarios_loads_profiles_in_the_same_query(client, profile):
    _profile(client, "expert", "Expert User")
    _profile(client, "admin", "Administrator")
    for key in ("novice", "expert", "admin"):
        _create(client, key, "onboarding")
    db.session.expunge_all()

    with _count_selects() as selects:
        res = client.get("/api/v1/scenarios")

    assert [s["profile_key"] for s in res.get_json()] == ["admin", "expert", "novice"]
    assert len(selects) == 1


def test_get_scenario_single_query(client, scenario):
    db.session.expunge_all()
    with _count_selects() as selects:
        res = client.get("/api/v1/scenarios/novice/onboarding")
    assert res.get_json()["profile_key"] == "novice"
    assert len(selects) == 1


def test_list_scenarios_unknown_profile_is_empty(client):
    res = client.get("/api/v1/scenarios/ghost")
    assert res.status_code == 200
    assert res.get_json() == []


def test_list_all_scenarios_ordered_by_profile_then_key(client, profile):
    _profile(client, "expert", "Expert User")
    _create(client, "novice", "b")
    _create(client, "expert", "z")
    _create(client, "novice", "a")
    res = client.get("/api/v1/scenarios")
    pairs = [(s["profile_key"], s["scenario_key"]) for s in res.get_json()]
    assert pairs == [("expert", "z"), ("novice", "a"), ("novice", "b")]


# ═════════════════════════════════════════════════════════════════════════════
# UPDATE / DELETE
# ═════════════════════════════════════════════════════════════════════════════

def test_update_scenario_partial(client, scenario):
    res = client.put("/api/v1/scenarios/novice/onboarding", json={"maturity": 0})
    assert res.status_code == 200
    data = res.get_json()
    assert data["maturity"] == 0
    assert data["importance"] == 50
    assert data["display_name"] == "Onboarding"


def test_update_scenario_empty_patch(client, scenario):
    res = client.put("/api/v1/scenarios/novice/onboarding", json={})
    assert res.status_code == 400
    assert res.get_json()["error"] == "No fields to update"


def test_update_scenario_not_found(client, profile):
    res = client.put("/api/v1/scenarios/novice/ghost", json={"importance": 10})
    assert res.status_code == 404


def test_update_scenario_score_out_of_range(client, scenario):
    res = client.put("/api/v1/scenarios/novice/onboarding", json={"complexity": -1})
    assert res.status_code == 400


def test_delete_scenario(client, scenario):
    res = client.delete("/api/v1/scenarios/novice/onboarding")
    assert res.status_code == 200
    assert res.get_json()["message"] == "Scenario deleted successfully"
    assert client.get("/api/v1/scenarios/novice/onboarding").status_code == 404
    assert client.get("/api/v1/profiles/novice").status_code == 200


def test_delete_scenario_not_found(client, profile):
    assert client.delete("/api/v1/scenarios/novice/ghost").status_code == 404


# ── Incomplete paths ─────────────────────────────────────────────────────────

def test_post_without_profile_key(client):
    res = client.post("/api/v1/scenarios", json={"scenario_key": "x", "display_name": "X"})
    assert res.status_code == 400
    assert res.get_json()["error"] == "Profile key is required in URL"


def test_put_without_scenario_key(client, profile):
    res = client.put("/api/v1/scenarios/novice", json={"importance": 10})
    assert res.status_code == 400
    assert res.get_json()["error"] == "Profile key and scenario key are required"


def test_delete_without_keys(client):
    res = client.delete("/api/v1/scenarios")
    assert res.status_code == 400
