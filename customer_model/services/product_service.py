"""
Product Service — products and their ordered capability lists.

Capabilities follow the same ordered-replacement contract as workflow steps
(services/ordered_replacement.py). Product creation inserts the product row
and its capabilities in one transaction: a bad slug rolls the product back
too, so a product is never left half-created.
"""

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from customer_model.core.exceptions import ConflictError, NotFoundError
from customer_model.models import db
from customer_model.models.product import Product, ProductCapability
from customer_model.services.ordered_replacement import replace_ordered_items
from customer_model.utils.payload import Patch, require_fields, require_item_list

logger = logging.getLogger(__name__)


@dataclass
class ProductPatch(Patch):
    TEXT_FIELDS = ("display_name",)

    display_name: str | None = None


def _find(product_key: str) -> Product | None:
    return db.session.execute(
        select(Product).where(Product.product_key == product_key)
    ).scalar_one_or_none()


def get_product_or_404(product_key: str) -> Product:
    product = _find(product_key)
    if product is None:
        raise NotFoundError(resource="Product", resource_id=product_key)
    return product


def _capabilities_for(product_id) -> list[ProductCapability]:
    stmt = (
        select(ProductCapability)
        .where(ProductCapability.product_id == product_id)
        .order_by(ProductCapability.position)
    )
    return db.session.execute(stmt).scalars().all()


def list_products() -> list[dict]:
    """Every product by product_key with its ordered capabilities (two queries, no N+1)."""
    products = db.session.execute(select(Product).order_by(Product.product_key)).scalars().all()
    caps = db.session.execute(
        select(ProductCapability).order_by(ProductCapability.position)
    ).scalars().all()

    by_product: dict = {}
    for cap in caps:
        by_product.setdefault(cap.product_id, []).append(cap)
    return [p.to_dict(capabilities=by_product.get(p.id, [])) for p in products]


def get_product(product_key: str) -> dict:
    product = get_product_or_404(product_key)
    return product.to_dict(capabilities=_capabilities_for(product.id))


def create_product(data: dict) -> dict:
    """Create a product and its capabilities atomically.

    Body: {product_key, display_name, capabilities?: [{dev_approach_slug, partner_approach_slug}]}

    Raises:
        ValidationError: missing fields or capabilities not an array.
        SlugResolutionError: a capability slug does not resolve (product not created).
        ConflictError: product_key already taken.
    """
    values = require_fields(data, "product_key", "display_name")
    capabilities = data.get("capabilities")
    if capabilities is None:
        capabilities = []
    require_item_list(capabilities, "capabilities")

    if _find(values["product_key"]) is not None:
        raise ConflictError("Product", "product_key", values["product_key"])

    product = Product(**values)
    try:
        db.session.add(product)
        db.session.flush()
        replace_ordered_items(
            ProductCapability, "product_id", product.id, "position", capabilities,
            item_label="capability",
        )
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        raise ConflictError("Product", "product_key", values["product_key"]) from exc
    except Exception:
        db.session.rollback()
        raise

    logger.info(
        "Product created capabilities=%d", len(capabilities),
        extra={"product_key": values["product_key"]},
    )
    return get_product(values["product_key"])


def update_product(product_key: str, data: dict) -> dict:
    """Patch display_name and/or replace capabilities.

    ``capabilities`` replaces the whole list when present (an empty array
    clears it); when absent the stored list is left alone. A body with
    neither field returns the product unchanged.
    """
    display_name = ProductPatch.from_payload(data).display_name
    capabilities = data.get("capabilities")
    if capabilities is not None:
        require_item_list(capabilities, "capabilities")

    product = get_product_or_404(product_key)
    product_id = product.id
    try:
        if display_name is not None:
            product.display_name = display_name
        if capabilities is not None:
            replace_ordered_items(
                ProductCapability, "product_id", product_id, "position", capabilities,
                item_label="capability",
            )
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    logger.info(
        "Product updated display_name=%s capabilities=%s",
        display_name is not None,
        "unchanged" if capabilities is None else len(capabilities),
        extra={"product_key": product_key},
    )
    return get_product(product_key)


def delete_product(product_key: str) -> str:
    """Delete a product and its capabilities."""
    product = get_product_or_404(product_key)
    db.session.delete(product)
    db.session.commit()
    logger.info("Product deleted", extra={"product_key": product_key})
    return product_key
