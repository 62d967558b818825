"""
Scenario Service — CRUD on scenarios scoped to a parent profile.

Scenarios are addressed by the composite key (profile_key, scenario_key),
resolved through a join on profiles; scenario_key is only unique within its
profile, so two profiles may each own a scenario with the same key.
"""

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import contains_eager

from customer_model.core.exceptions import ConflictError, NotFoundError, ValidationError
from customer_model.models import SCORE_DEFAULT, db
from customer_model.models.profile import SCENARIO_SCORE_FIELDS, Profile, Scenario
from customer_model.services.profile_service import get_profile_or_404
from customer_model.utils.payload import Patch, coerce_score, require_fields

logger = logging.getLogger(__name__)


@dataclass
class ScenarioPatch(Patch):
    TEXT_FIELDS = ("display_name",)
    SCORE_FIELDS = SCENARIO_SCORE_FIELDS

    display_name: str | None = None
    importance: int | None = None
    complexity: int | None = None
    maturity: int | None = None


def find_scenario(profile_key: str, scenario_key: str) -> Scenario | None:
    stmt = (
        select(Scenario)
        .join(Profile, Profile.id == Scenario.profile_id)
        .options(contains_eager(Scenario.profile))
        .where(Profile.profile_key == profile_key, Scenario.scenario_key == scenario_key)
    )
    return db.session.execute(stmt).scalar_one_or_none()


def get_scenario_or_404(profile_key: str, scenario_key: str) -> Scenario:
    scenario = find_scenario(profile_key, scenario_key)
    if scenario is None:
        raise NotFoundError(resource="Scenario", resource_id=f"{profile_key}/{scenario_key}")
    return scenario


def list_scenarios(profile_key: str | None = None) -> list[dict]:
    """All scenarios by (profile_key, scenario_key), or one profile's by scenario_key.

    An unknown profile_key yields an empty list rather than a 404.
    """
    stmt = (
        select(Scenario)
        .join(Profile, Profile.id == Scenario.profile_id)
        .options(contains_eager(Scenario.profile))
    )
    if profile_key is not None:
        stmt = stmt.where(Profile.profile_key == profile_key).order_by(Scenario.scenario_key)
    else:
        stmt = stmt.order_by(Profile.profile_key, Scenario.scenario_key)
    return [s.to_dict() for s in db.session.execute(stmt).scalars().all()]


def get_scenario(profile_key: str, scenario_key: str) -> dict:
    return get_scenario_or_404(profile_key, scenario_key).to_dict()


def create_scenario(profile_key: str, data: dict) -> dict:
    """Create a scenario under an existing profile.

    Raises:
        ValidationError: scenario_key / display_name missing, or a score out of range.
        NotFoundError: the parent profile does not exist.
        ConflictError: the profile already has this scenario_key.
    """
    values = require_fields(data, "scenario_key", "display_name")
    scores = {
        name: SCORE_DEFAULT if data.get(name) is None else coerce_score(name, data[name])
        for name in SCENARIO_SCORE_FIELDS
    }

    profile = get_profile_or_404(profile_key)
    if find_scenario(profile_key, values["scenario_key"]) is not None:
        raise ConflictError("Scenario", "scenario_key", values["scenario_key"])

    scenario = Scenario(profile_id=profile.id, **values, **scores)
    db.session.add(scenario)
    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        raise ConflictError("Scenario", "scenario_key", values["scenario_key"]) from exc

    logger.info(
        "Scenario created",
        extra={"profile_key": profile_key, "scenario_key": scenario.scenario_key},
    )
    return scenario.to_dict()


def update_scenario(profile_key: str, scenario_key: str, data: dict) -> dict:
    patch = ScenarioPatch.from_payload(data)
    if patch.is_empty():
        raise ValidationError("No fields to update")

    scenario = get_scenario_or_404(profile_key, scenario_key)
    changed = patch.apply_to(scenario)
    db.session.commit()

    logger.info(
        "Scenario updated fields=%s", ",".join(changed),
        extra={"profile_key": profile_key, "scenario_key": scenario_key},
    )
    return scenario.to_dict()


def delete_scenario(profile_key: str, scenario_key: str) -> str:
    """Delete a scenario and its workflow steps."""
    scenario = get_scenario_or_404(profile_key, scenario_key)
    db.session.delete(scenario)
    db.session.commit()
    logger.info("Scenario deleted", extra={"profile_key": profile_key, "scenario_key": scenario_key})
    return scenario_key
