"""
Customer Model Service
Snapshot Blueprint — the whole customer model keyed by business keys.

Endpoints:
    GET /api/v1/customer-model — profiles, scenarios, workflows and products in one document
"""

from flask import Blueprint, jsonify

from customer_model.services.snapshot_service import build_snapshot

snapshot_bp = Blueprint("snapshot", __name__, url_prefix="/api/v1")


@snapshot_bp.route("/customer-model", methods=["GET"])
def get_snapshot():
    return jsonify(build_snapshot()), 200
