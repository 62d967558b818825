"""
Vocabulary Service — read-only access to dev / partner approaches.

Active rows only, ordered by (sort_order, name). resolve_slugs() is the
lookup the ordered-replacement engine uses; it matches any existing row,
active or not, so retiring a tag never breaks a stored list on rewrite.
"""

import uuid

from sqlalchemy import select

from customer_model.models import db
from customer_model.models.vocabulary import Approach, DevApproach, PartnerApproach

VOCABULARY_TYPES = {
    "dev-approaches": DevApproach,
    "partner-approaches": PartnerApproach,
}


def _list_active(model: type[Approach]) -> list[dict]:
    stmt = (
        select(model)
        .where(model.is_active.is_(True))
        .order_by(model.sort_order, model.name)
    )
    return [row.to_dict() for row in db.session.execute(stmt).scalars().all()]


def list_dev_approaches() -> list[dict]:
    return _list_active(DevApproach)


def list_partner_approaches() -> list[dict]:
    return _list_active(PartnerApproach)


def list_vocabularies() -> dict:
    return {
        "dev_approaches": list_dev_approaches(),
        "partner_approaches": list_partner_approaches(),
    }


def list_vocabulary(vocab_type: str) -> list[dict] | None:
    """Return one vocabulary by its URL name, or None for an unknown type."""
    model = VOCABULARY_TYPES.get(vocab_type)
    if model is None:
        return None
    return _list_active(model)


def resolve_slugs(model: type[Approach], slugs) -> dict[str, uuid.UUID]:
    """Map each known slug to its id in one query. Non-string slugs never resolve."""
    wanted = {s for s in slugs if isinstance(s, str)}
    if not wanted:
        return {}
    rows = db.session.execute(select(model.slug, model.id).where(model.slug.in_(wanted))).all()
    return {slug: approach_id for slug, approach_id in rows}
