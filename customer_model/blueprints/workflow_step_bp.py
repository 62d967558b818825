"""
Customer Model Service
Workflow Step Blueprint — ordered step lists of a scenario.

Endpoints:
    GET    /api/v1/workflow-steps/<profile_key>/<scenario_key>  — Steps by position
    POST   /api/v1/workflow-steps/<profile_key>/<scenario_key>  — Replace all steps
    PUT    /api/v1/workflow-steps/<profile_key>/<scenario_key>  — Replace all steps (same as POST)
    DELETE /api/v1/workflow-steps/<profile_key>/<scenario_key>  — Remove all steps

Body for POST/PUT: {"steps": [{"dev_approach_slug": ..., "partner_approach_slug": ...}, ...]}
"""

from flask import Blueprint, jsonify

from customer_model.services import workflow_step_service
from customer_model.utils.errors import E, api_error
from customer_model.utils.payload import get_json_body

workflow_step_bp = Blueprint("workflow_step", __name__, url_prefix="/api/v1")

_ALL_METHODS = ["GET", "POST", "PUT", "DELETE"]


@workflow_step_bp.route("/workflow-steps/<profile_key>/<scenario_key>", methods=["GET"])
def list_steps(profile_key, scenario_key):
    return jsonify(workflow_step_service.list_steps(profile_key, scenario_key)), 200


@workflow_step_bp.route("/workflow-steps/<profile_key>/<scenario_key>", methods=["POST", "PUT"])
def replace_steps(profile_key, scenario_key):
    data = get_json_body()
    steps = workflow_step_service.replace_steps(profile_key, scenario_key, data.get("steps"))
    return jsonify(steps), 201


@workflow_step_bp.route("/workflow-steps/<profile_key>/<scenario_key>", methods=["DELETE"])
def delete_steps(profile_key, scenario_key):
    workflow_step_service.delete_steps(profile_key, scenario_key)
    return jsonify({"message": "Workflow steps deleted successfully"}), 200


@workflow_step_bp.route("/workflow-steps", methods=_ALL_METHODS)
@workflow_step_bp.route("/workflow-steps/<profile_key>", methods=_ALL_METHODS)
def composite_key_required(profile_key=None):
    return api_error(E.VALIDATION_REQUIRED, "Profile key and scenario key are required")
