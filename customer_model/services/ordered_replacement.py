"""
Ordered replacement — the one write path for workflow steps and product capabilities.

replace_ordered_items() deletes every row a parent owns and reinserts the
submitted list with positions 1..n in list order. Each item names a
dev_approach_slug and a partner_approach_slug; both must resolve against the
vocabulary tables or SlugResolutionError is raised for the first bad item.

Transaction contract:
    The caller opens nothing and commits nothing here. It calls this inside
    its own try block, commits on success, and rolls back on any exception;
    the delete therefore never survives a failed resolution.

There is no row lock on the parent: two concurrent replacements of the same
list interleave at the row level and the last commit wins.
"""

import logging

from sqlalchemy import delete

from customer_model.core.exceptions import SlugResolutionError, ValidationError
from customer_model.models import db
from customer_model.models.vocabulary import DevApproach, PartnerApproach
from customer_model.services.vocabulary_service import resolve_slugs

logger = logging.getLogger(__name__)


def replace_ordered_items(
    model,
    parent_attr: str,
    parent_id,
    position_attr: str,
    items: list,
    *,
    item_label: str,
) -> list:
    """Replace the ordered children of one parent.

    Args:
        model: Child model (WorkflowStep or ProductCapability).
        parent_attr: FK attribute on ``model`` pointing at the parent.
        parent_id: The parent's id.
        position_attr: Attribute holding the 1-based position.
        items: Submitted list of {dev_approach_slug, partner_approach_slug}.
        item_label: "step" / "capability" for error messages.

    Returns:
        The new (flushed, uncommitted) child rows in position order.

    Raises:
        ValidationError: an item is not an object.
        SlugResolutionError: an item's slug does not exist.
    """
    db.session.execute(
        delete(model).where(getattr(model, parent_attr) == parent_id)
    )

    for index, item in enumerate(items, start=1):
        if not isinstance(item, dict):
            raise ValidationError(
                f"{item_label} {index} must be an object",
                details={"index": index},
            )

    dev_ids = resolve_slugs(DevApproach, (i.get("dev_approach_slug") for i in items))
    partner_ids = resolve_slugs(PartnerApproach, (i.get("partner_approach_slug") for i in items))

    rows = []
    for index, item in enumerate(items, start=1):
        dev_slug = item.get("dev_approach_slug")
        partner_slug = item.get("partner_approach_slug")
        dev_id = dev_ids.get(dev_slug) if isinstance(dev_slug, str) else None
        partner_id = partner_ids.get(partner_slug) if isinstance(partner_slug, str) else None
        if dev_id is None or partner_id is None:
            logger.warning(
                "Unresolved approach slug at %s %d (dev=%r partner=%r)",
                item_label, index, dev_slug, partner_slug,
            )
            raise SlugResolutionError(item_label, index, dev_slug, partner_slug)
        rows.append(model(**{
            parent_attr: parent_id,
            position_attr: index,
            "dev_approach_id": dev_id,
            "partner_approach_id": partner_id,
        }))

    db.session.add_all(rows)
    db.session.flush()
    return rows
