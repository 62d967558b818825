"""
Workflow Step Service — ordered replacement of a scenario's steps.

POST and PUT are the same operation: the submitted list becomes the whole
workflow. The scenario is resolved first (404 leaves the stored steps
untouched); the delete and every insert then run in one transaction that is
rolled back on any failure, so a bad slug at step 3 of 5 commits nothing.
"""

import logging

from sqlalchemy import delete, select

from customer_model.models import db
from customer_model.models.profile import Profile, Scenario, WorkflowStep
from customer_model.services.ordered_replacement import replace_ordered_items
from customer_model.services.scenario_service import get_scenario_or_404
from customer_model.utils.payload import require_item_list

logger = logging.getLogger(__name__)


def _steps_for(scenario_id) -> list[dict]:
    stmt = (
        select(WorkflowStep)
        .where(WorkflowStep.scenario_id == scenario_id)
        .order_by(WorkflowStep.step_index)
    )
    return [s.to_dict() for s in db.session.execute(stmt).scalars().all()]


def list_steps(profile_key: str, scenario_key: str) -> list[dict]:
    """Steps ordered by position; an unknown scenario yields []."""
    stmt = (
        select(WorkflowStep)
        .join(Scenario, Scenario.id == WorkflowStep.scenario_id)
        .join(Profile, Profile.id == Scenario.profile_id)
        .where(Profile.profile_key == profile_key, Scenario.scenario_key == scenario_key)
        .order_by(WorkflowStep.step_index)
    )
    return [s.to_dict() for s in db.session.execute(stmt).scalars().all()]


def replace_steps(profile_key: str, scenario_key: str, steps) -> list[dict]:
    """Replace every step of a scenario with ``steps`` and return the stored list.

    Raises:
        ValidationError: ``steps`` is not a list, or an item is not an object.
        NotFoundError: the scenario does not exist.
        SlugResolutionError: an approach slug does not resolve (nothing committed).
    """
    require_item_list(steps, "steps")
    scenario = get_scenario_or_404(profile_key, scenario_key)
    scenario_id = scenario.id

    try:
        replace_ordered_items(
            WorkflowStep, "scenario_id", scenario_id, "step_index", steps,
            item_label="step",
        )
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    logger.info(
        "Workflow steps replaced count=%d", len(steps),
        extra={"profile_key": profile_key, "scenario_key": scenario_key},
    )
    return _steps_for(scenario_id)


def delete_steps(profile_key: str, scenario_key: str) -> int:
    """Remove every step of an existing scenario. Zero existing steps is not an error."""
    scenario = get_scenario_or_404(profile_key, scenario_key)
    try:
        result = db.session.execute(
            delete(WorkflowStep).where(WorkflowStep.scenario_id == scenario.id)
        )
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    logger.info(
        "Workflow steps deleted count=%d", result.rowcount,
        extra={"profile_key": profile_key, "scenario_key": scenario_key},
    )
    return result.rowcount
