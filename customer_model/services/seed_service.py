"""
Vocabulary seeding — default dev (role) and partner (focus) approaches.

Idempotent: slugs that already exist are left untouched, so re-running the
seed never overwrites names or ordering an operator has edited. The caller
commits (see the ``seed-vocabularies`` CLI command).
"""

import logging

from sqlalchemy import select

from customer_model.models import db
from customer_model.models.vocabulary import DevApproach, PartnerApproach

logger = logging.getLogger(__name__)

DEFAULT_DEV_APPROACHES: list[dict] = [
    {"slug": "self-directed", "name": "Self-Directed", "sort_order": 1,
     "description": "The customer's own developers drive the work end to end."},
    {"slug": "guided", "name": "Guided", "sort_order": 2,
     "description": "Customer developers lead with structured guidance and templates."},
    {"slug": "pair-programming", "name": "Pair Programming", "sort_order": 3,
     "description": "Customer and partner engineers build side by side."},
    {"slug": "delegated", "name": "Delegated", "sort_order": 4,
     "description": "A partner team builds on the customer's behalf."},
    {"slug": "review-only", "name": "Review Only", "sort_order": 5,
     "description": "The customer reviews and approves work produced elsewhere."},
]

DEFAULT_PARTNER_APPROACHES: list[dict] = [
    {"slug": "discovery", "name": "Discovery", "sort_order": 1,
     "description": "Clarify goals, constraints and success criteria."},
    {"slug": "design", "name": "Design", "sort_order": 2,
     "description": "Shape the solution architecture and guardrails."},
    {"slug": "implementation", "name": "Implementation", "sort_order": 3,
     "description": "Build and integrate the solution."},
    {"slug": "validation", "name": "Validation", "sort_order": 4,
     "description": "Test, evaluate and harden before release."},
    {"slug": "enablement", "name": "Enablement", "sort_order": 5,
     "description": "Transfer knowledge so the customer can operate independently."},
]


def _seed(model, entries: list[dict]) -> int:
    existing = set(db.session.execute(select(model.slug)).scalars().all())
    created = 0
    for entry in entries:
        if entry["slug"] in existing:
            continue
        db.session.add(model(**entry))
        created += 1
    return created


def seed_default_vocabularies() -> int:
    """Insert missing default approaches. Returns the number of rows added (uncommitted)."""
    created = _seed(DevApproach, DEFAULT_DEV_APPROACHES)
    created += _seed(PartnerApproach, DEFAULT_PARTNER_APPROACHES)
    db.session.flush()
    logger.info("Vocabulary seed added %d approaches", created)
    return created
