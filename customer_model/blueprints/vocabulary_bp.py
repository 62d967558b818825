"""
Customer Model Service
Vocabulary Blueprint — read-only approach tags.

Endpoints:
    GET /api/v1/vocabularies                     — {dev_approaches, partner_approaches}
    GET /api/v1/vocabularies/dev-approaches      — Active dev approaches
    GET /api/v1/vocabularies/partner-approaches  — Active partner approaches
"""

from flask import Blueprint, jsonify

from customer_model.services import vocabulary_service
from customer_model.utils.errors import E, api_error

vocabulary_bp = Blueprint("vocabulary", __name__, url_prefix="/api/v1")


@vocabulary_bp.route("/vocabularies", methods=["GET"])
def list_vocabularies():
    return jsonify(vocabulary_service.list_vocabularies()), 200


@vocabulary_bp.route("/vocabularies/<vocab_type>", methods=["GET"])
def list_vocabulary(vocab_type):
    rows = vocabulary_service.list_vocabulary(vocab_type)
    if rows is None:
        return api_error(
            E.VALIDATION_INVALID,
            'Invalid type. Use "dev-approaches" or "partner-approaches"',
        )
    return jsonify(rows), 200
