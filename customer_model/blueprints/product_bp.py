"""
Customer Model Service
Product Blueprint — products with ordered capability lists.

Endpoints:
    GET    /api/v1/products                — All products with capabilities
    GET    /api/v1/products/<product_key>  — Product detail with capabilities
    POST   /api/v1/products                — Create product (+ capabilities, atomically)
    PUT    /api/v1/products/<product_key>  — Patch display_name and/or replace capabilities
    DELETE /api/v1/products/<product_key>  — Delete (cascades to capabilities)
"""

from flask import Blueprint, jsonify

from customer_model.services import product_service
from customer_model.utils.errors import E, api_error
from customer_model.utils.payload import get_json_body

product_bp = Blueprint("product", __name__, url_prefix="/api/v1")


@product_bp.route("/products", methods=["GET"])
def list_products():
    return jsonify(product_service.list_products()), 200


@product_bp.route("/products/<product_key>", methods=["GET"])
def get_product(product_key):
    return jsonify(product_service.get_product(product_key)), 200


@product_bp.route("/products", methods=["POST"])
def create_product():
    """Body: {product_key, display_name, capabilities?: [{dev_approach_slug, partner_approach_slug}]}"""
    return jsonify(product_service.create_product(get_json_body())), 201


@product_bp.route("/products/<product_key>", methods=["PUT"])
def update_product(product_key):
    """Body: {display_name?, capabilities?}. An empty capabilities array clears the list."""
    return jsonify(product_service.update_product(product_key, get_json_body())), 200


@product_bp.route("/products/<product_key>", methods=["DELETE"])
def delete_product(product_key):
    product_service.delete_product(product_key)
    return jsonify({"message": "Product deleted successfully"}), 200


@product_bp.route("/products", methods=["PUT", "DELETE"])
def product_key_required():
    return api_error(E.VALIDATION_REQUIRED, "Product key is required")
