"""
Customer Model Service
Tests — Profile API.

Covers:
    - Create with default / explicit scores
    - Round-trip fetch, listing order
    - Partial update, empty patch, not found
    - Uniqueness of profile_key
    - Delete cascade to scenarios and workflow steps
"""

from datetime import datetime, timedelta

from sqlalchemy import func, select

from customer_model.models import db
from customer_model.models.profile import Scenario, WorkflowStep


def step(dev, partner):
    return {"dev_approach_slug": dev, "partner_approach_slug": partner}


# ═════════════════════════════════════════════════════════════════════════════
# CREATE / READ
# ═════════════════════════════════════════════════════════════════════════════

def test_create_profile_defaults_scores_to_midpoint(client):
    res = client.post("/api/v1/profiles", json={
        "profile_key": "novice", "display_name": "Novice User",
    })
    assert res.status_code == 201
    data = res.get_json()
    assert data["profile_key"] == "novice"
    assert data["display_name"] == "Novice User"
    assert (data["expertise"], data["aicapability"], data["governance"]) == (50, 50, 50)


def test_get_profile_round_trip(client, profile):
    res = client.get("/api/v1/profiles/novice")
    assert res.status_code == 200
    assert res.get_json() == profile


def test_profile_id_is_canonical_uuid_text(client, profile):
    pid = profile["id"]
    assert len(pid) == 36
    assert pid == pid.lower()
    assert [len(part) for part in pid.split("-")] == [8, 4, 4, 4, 12]


def test_timestamps_are_utc_aware(client, profile):
    for body in (profile, client.get("/api/v1/profiles/novice").get_json()):
        for field in ("created_at", "updated_at"):
            stamp = datetime.fromisoformat(body[field])
            assert stamp.tzinfo is not None
            assert stamp.utcoffset() == timedelta(0)


def test_create_profile_explicit_scores_including_zero(client):
    res = client.post("/api/v1/profiles", json={
        "profile_key": "expert", "display_name": "Expert",
        "expertise": 90, "aicapability": 0, "governance": 75,
    })
    assert res.status_code == 201
    data = res.get_json()
    assert data["expertise"] == 90
    assert data["aicapability"] == 0
    assert data["governance"] == 75


def test_create_profile_missing_fields(client):
    res = client.post("/api/v1/profiles", json={"profile_key": "x"})
    assert res.status_code == 400
    body = res.get_json()
    assert body["error"] == "profile_key and display_name are required"
    assert body["details"] == {"display_name": "required"}


def test_create_profile_blank_key_rejected(client):
    res = client.post("/api/v1/profiles", json={"profile_key": "  ", "display_name": "X"})
    assert res.status_code == 400


def test_create_profile_non_string_key(client):
    res = client.post("/api/v1/profiles", json={"profile_key": 5, "display_name": "Five"})
    assert res.status_code == 400
    body = res.get_json()
    assert body["error"] == "profile_key must be a string"
    assert body["code"] == "ERR_VALIDATION_INVALID"


def test_create_profile_score_out_of_range(client):
    res = client.post("/api/v1/profiles", json={
        "profile_key": "x", "display_name": "X", "expertise": 101,
    })
    assert res.status_code == 400
    assert "expertise" in res.get_json()["error"]


def test_create_profile_score_not_numeric(client):
    res = client.post("/api/v1/profiles", json={
        "profile_key": "x", "display_name": "X", "governance": "high",
    })
    assert res.status_code == 400


def test_create_profile_duplicate_key_conflicts(client, profile):
    res = client.post("/api/v1/profiles", json={
        "profile_key": "novice", "display_name": "Another Novice",
    })
    assert res.status_code == 409
    assert res.get_json()["code"] == "ERR_CONFLICT_DUPLICATE"

    original = client.get("/api/v1/profiles/novice").get_json()
    assert original["display_name"] == "Novice User"


def test_list_profiles_ordered_by_display_name(client):
    for key, name in [("b", "Zeta"), ("a", "Alpha"), ("c", "Mid")]:
        client.post("/api/v1/profiles", json={"profile_key": key, "display_name": name})
    res = client.get("/api/v1/profiles")
    assert res.status_code == 200
    assert [p["display_name"] for p in res.get_json()] == ["Alpha", "Mid", "Zeta"]


def test_get_profile_not_found(client):
    res = client.get("/api/v1/profiles/ghost")
    assert res.status_code == 404
    assert res.get_json()["error"] == "Profile not found"


# ═════════════════════════════════════════════════════════════════════════════
# UPDATE
# ═════════════════════════════════════════════════════════════════════════════

def test_update_profile_applies_only_supplied_fields(client, profile):
    res = client.put("/api/v1/profiles/novice", json={"expertise": 20})
    assert res.status_code == 200
    data = res.get_json()
    assert data["expertise"] == 20
    assert data["display_name"] == "Novice User"
    assert data["aicapability"] == 50


def test_update_profile_empty_patch(client, profile):
    res = client.put("/api/v1/profiles/novice", json={})
    assert res.status_code == 400
    assert res.get_json()["error"] == "No fields to update"


def test_update_profile_ignores_unknown_fields_only_patch(client, profile):
    res = client.put("/api/v1/profiles/novice", json={"profile_key": "renamed"})
    assert res.status_code == 400


def test_update_profile_not_found(client):
    res = client.put("/api/v1/profiles/ghost", json={"display_name": "Ghost"})
    assert res.status_code == 404


def test_update_profile_empty_display_name_rejected(client, profile):
    res = client.put("/api/v1/profiles/novice", json={"display_name": ""})
    assert res.status_code == 400


def test_update_profile_non_string_display_name(client, profile):
    res = client.put("/api/v1/profiles/novice", json={"display_name": 42})
    assert res.status_code == 400
    assert res.get_json()["error"] == "display_name must be a string"


def test_put_without_key(client):
    res = client.put("/api/v1/profiles", json={"display_name": "X"})
    assert res.status_code == 400
    assert res.get_json()["error"] == "Profile key is required"


# ═════════════════════════════════════════════════════════════════════════════
# DELETE
# ═════════════════════════════════════════════════════════════════════════════

def test_delete_profile(client, profile):
    res = client.delete("/api/v1/profiles/novice")
    assert res.status_code == 200
    assert res.get_json()["message"] == "Profile deleted successfully"
    assert client.get("/api/v1/profiles/novice").status_code == 404


def test_delete_profile_not_found(client):
    assert client.delete("/api/v1/profiles/ghost").status_code == 404


def test_delete_profile_cascades_to_scenarios_and_steps(client, vocabulary, scenario):
    res = client.post("/api/v1/workflow-steps/novice/onboarding", json={
        "steps": [step("guided", "discovery"), step("delegated", "implementation")],
    })
    assert res.status_code == 201

    assert client.delete("/api/v1/profiles/novice").status_code == 200

    assert client.get("/api/v1/scenarios/novice/onboarding").status_code == 404
    assert client.get("/api/v1/workflow-steps/novice/onboarding").get_json() == []
    assert db.session.execute(select(func.count()).select_from(Scenario)).scalar() == 0
    assert db.session.execute(select(func.count()).select_from(WorkflowStep)).scalar() == 0


def test_example_scenario(client):
    res = client.post("/api/v1/profiles", json={
        "profile_key": "novice", "display_name": "Novice User",
    })
    assert res.status_code == 201
    created = res.get_json()
    assert created["expertise"] == 50
    assert created["aicapability"] == 50
    assert created["governance"] == 50
    assert client.get("/api/v1/profiles/novice").get_json() == created
