"""
Profile Service — CRUD on customer archetypes.

Profiles are addressed by profile_key; the UUID primary key is internal and
only leaves this layer in text form through Profile.to_dict().

Scores default to the midpoint (50) when omitted on create. An explicit 0
is a valid score and is stored as 0.
"""

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from customer_model.core.exceptions import ConflictError, NotFoundError, ValidationError
from customer_model.models import SCORE_DEFAULT, db
from customer_model.models.profile import PROFILE_SCORE_FIELDS, Profile
from customer_model.utils.payload import Patch, coerce_score, require_fields

logger = logging.getLogger(__name__)


@dataclass
class ProfilePatch(Patch):
    TEXT_FIELDS = ("display_name",)
    SCORE_FIELDS = PROFILE_SCORE_FIELDS

    display_name: str | None = None
    expertise: int | None = None
    aicapability: int | None = None
    governance: int | None = None


def _find(profile_key: str) -> Profile | None:
    return db.session.execute(
        select(Profile).where(Profile.profile_key == profile_key)
    ).scalar_one_or_none()


def get_profile_or_404(profile_key: str) -> Profile:
    profile = _find(profile_key)
    if profile is None:
        raise NotFoundError(resource="Profile", resource_id=profile_key)
    return profile


def list_profiles() -> list[dict]:
    stmt = select(Profile).order_by(Profile.display_name)
    return [p.to_dict() for p in db.session.execute(stmt).scalars().all()]


def get_profile(profile_key: str) -> dict:
    return get_profile_or_404(profile_key).to_dict()


def create_profile(data: dict) -> dict:
    """Create a profile.

    Raises:
        ValidationError: profile_key / display_name missing, or a score out of range.
        ConflictError: profile_key already taken.
    """
    values = require_fields(data, "profile_key", "display_name")
    scores = {
        name: SCORE_DEFAULT if data.get(name) is None else coerce_score(name, data[name])
        for name in PROFILE_SCORE_FIELDS
    }

    if _find(values["profile_key"]) is not None:
        raise ConflictError("Profile", "profile_key", values["profile_key"])

    profile = Profile(**values, **scores)
    db.session.add(profile)
    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        raise ConflictError("Profile", "profile_key", values["profile_key"]) from exc

    logger.info("Profile created", extra={"profile_key": profile.profile_key})
    return profile.to_dict()


def update_profile(profile_key: str, data: dict) -> dict:
    """Apply only the supplied fields. An empty patch is rejected before any lookup."""
    patch = ProfilePatch.from_payload(data)
    if patch.is_empty():
        raise ValidationError("No fields to update")

    profile = get_profile_or_404(profile_key)
    changed = patch.apply_to(profile)
    db.session.commit()

    logger.info("Profile updated fields=%s", ",".join(changed), extra={"profile_key": profile_key})
    return profile.to_dict()


def delete_profile(profile_key: str) -> str:
    """Delete a profile; its scenarios and their workflow steps go with it."""
    profile = get_profile_or_404(profile_key)
    db.session.delete(profile)
    db.session.commit()
    logger.info("Profile deleted", extra={"profile_key": profile_key})
    return profile_key
