"""
Customer Model Service
Scenario Blueprint — CRUD API for scenarios addressed by (profile_key, scenario_key).

Endpoints:
    GET    /api/v1/scenarios                              — All scenarios
    GET    /api/v1/scenarios/<profile_key>                — Scenarios of one profile
    GET    /api/v1/scenarios/<profile_key>/<scenario_key> — Scenario detail
    POST   /api/v1/scenarios/<profile_key>                — Create scenario under a profile
    PUT    /api/v1/scenarios/<profile_key>/<scenario_key> — Partial update
    DELETE /api/v1/scenarios/<profile_key>/<scenario_key> — Delete (cascades to steps)
"""

from flask import Blueprint, jsonify

from customer_model.services import scenario_service
from customer_model.utils.errors import E, api_error
from customer_model.utils.payload import get_json_body

scenario_bp = Blueprint("scenario", __name__, url_prefix="/api/v1")


# ═════════════════════════════════════════════════════════════════════════════
# READ
# ═════════════════════════════════════════════════════════════════════════════

@scenario_bp.route("/scenarios", methods=["GET"])
def list_all_scenarios():
    return jsonify(scenario_service.list_scenarios()), 200


@scenario_bp.route("/scenarios/<profile_key>", methods=["GET"])
def list_profile_scenarios(profile_key):
    return jsonify(scenario_service.list_scenarios(profile_key)), 200


@scenario_bp.route("/scenarios/<profile_key>/<scenario_key>", methods=["GET"])
def get_scenario(profile_key, scenario_key):
    return jsonify(scenario_service.get_scenario(profile_key, scenario_key)), 200


# ═════════════════════════════════════════════════════════════════════════════
# WRITE
# ═════════════════════════════════════════════════════════════════════════════

@scenario_bp.route("/scenarios/<profile_key>", methods=["POST"])
def create_scenario(profile_key):
    """Create a scenario.

    Body: {scenario_key, display_name, importance?, complexity?, maturity?}
    """
    scenario = scenario_service.create_scenario(profile_key, get_json_body())
    return jsonify(scenario), 201


@scenario_bp.route("/scenarios/<profile_key>/<scenario_key>", methods=["PUT"])
def update_scenario(profile_key, scenario_key):
    scenario = scenario_service.update_scenario(profile_key, scenario_key, get_json_body())
    return jsonify(scenario), 200


@scenario_bp.route("/scenarios/<profile_key>/<scenario_key>", methods=["DELETE"])
def delete_scenario(profile_key, scenario_key):
    scenario_service.delete_scenario(profile_key, scenario_key)
    return jsonify({"message": "Scenario deleted successfully"}), 200


# ── Incomplete paths ─────────────────────────────────────────────────────────

@scenario_bp.route("/scenarios", methods=["POST"])
def profile_key_required():
    return api_error(E.VALIDATION_REQUIRED, "Profile key is required in URL")


@scenario_bp.route("/scenarios", methods=["PUT", "DELETE"])
@scenario_bp.route("/scenarios/<profile_key>", methods=["PUT", "DELETE"])
def composite_key_required(profile_key=None):
    return api_error(E.VALIDATION_REQUIRED, "Profile key and scenario key are required")
