"""
Customer Model Service
Profile Blueprint — CRUD API for customer archetypes.

Endpoints:
    GET    /api/v1/profiles                 — List profiles (by display_name)
    GET    /api/v1/profiles/<profile_key>   — Profile detail
    POST   /api/v1/profiles                 — Create profile
    PUT    /api/v1/profiles/<profile_key>   — Partial update
    DELETE /api/v1/profiles/<profile_key>   — Delete (cascades to scenarios and steps)

Layer contract:
    - No ORM calls here — all DB work delegated to profile_service.
    - Service exceptions are mapped to responses by the app-level handlers.
"""

from flask import Blueprint, jsonify

from customer_model.services import profile_service
from customer_model.utils.errors import E, api_error
from customer_model.utils.payload import get_json_body

profile_bp = Blueprint("profile", __name__, url_prefix="/api/v1")


@profile_bp.route("/profiles", methods=["GET"])
def list_profiles():
    return jsonify(profile_service.list_profiles()), 200


@profile_bp.route("/profiles/<profile_key>", methods=["GET"])
def get_profile(profile_key):
    return jsonify(profile_service.get_profile(profile_key)), 200


@profile_bp.route("/profiles", methods=["POST"])
def create_profile():
    """Create a profile.

    Body: {profile_key, display_name, expertise?, aicapability?, governance?}
    Omitted scores default to 50.
    """
    profile = profile_service.create_profile(get_json_body())
    return jsonify(profile), 201


@profile_bp.route("/profiles/<profile_key>", methods=["PUT"])
def update_profile(profile_key):
    """Body: any of {display_name, expertise, aicapability, governance}."""
    return jsonify(profile_service.update_profile(profile_key, get_json_body())), 200


@profile_bp.route("/profiles/<profile_key>", methods=["DELETE"])
def delete_profile(profile_key):
    profile_service.delete_profile(profile_key)
    return jsonify({"message": "Profile deleted successfully"}), 200


@profile_bp.route("/profiles", methods=["PUT", "DELETE"])
def profile_key_required():
    return api_error(E.VALIDATION_REQUIRED, "Profile key is required")
