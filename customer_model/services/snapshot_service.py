"""
Customer-model snapshot — the whole taxonomy in one read-only document.

Shape (keys are business keys, never UUIDs):
    preset_factors[profile_key]             = {expertise, aicapability, governance}
    preset_metadata[profile_key]            = display_name
    scenario_factors["profile:scenario"]    = {importance, complexity, maturity}
    scenario_metadata[profile][scenario]    = display_name
    workflows["profile:scenario"]           = [[role_name, focus_name], ...] by step
    product_capabilities[product_key]       = [[role_name, focus_name], ...] by position
    product_metadata[product_key]           = display_name

Only scenarios that have at least one step appear under ``workflows``;
every product appears under ``product_capabilities`` (empty list if none).
"""

from datetime import datetime, timezone

from sqlalchemy import select

from customer_model.models import db
from customer_model.models.product import Product, ProductCapability
from customer_model.models.profile import Profile, Scenario, WorkflowStep

SNAPSHOT_VERSION = "1.0"


def composite_key(profile_key: str, scenario_key: str) -> str:
    return f"{profile_key}:{scenario_key}"


def _pair(row) -> list[str]:
    return [row.dev_approach.name, row.partner_approach.name]


def build_snapshot() -> dict:
    profiles = db.session.execute(select(Profile).order_by(Profile.profile_key)).scalars().all()
    preset_factors = {
        p.profile_key: {
            "expertise": p.expertise,
            "aicapability": p.aicapability,
            "governance": p.governance,
        }
        for p in profiles
    }
    preset_metadata = {p.profile_key: p.display_name for p in profiles}

    scenario_rows = db.session.execute(
        select(Profile.profile_key, Scenario)
        .join(Scenario, Scenario.profile_id == Profile.id)
        .order_by(Profile.profile_key, Scenario.scenario_key)
    ).all()
    scenario_factors = {}
    scenario_metadata: dict[str, dict] = {}
    for profile_key, scenario in scenario_rows:
        scenario_factors[composite_key(profile_key, scenario.scenario_key)] = {
            "importance": scenario.importance,
            "complexity": scenario.complexity,
            "maturity": scenario.maturity,
        }
        scenario_metadata.setdefault(profile_key, {})[scenario.scenario_key] = scenario.display_name

    step_rows = db.session.execute(
        select(Profile.profile_key, Scenario.scenario_key, WorkflowStep)
        .join(Scenario, Scenario.id == WorkflowStep.scenario_id)
        .join(Profile, Profile.id == Scenario.profile_id)
        .order_by(Profile.profile_key, Scenario.scenario_key, WorkflowStep.step_index)
    ).all()
    workflows: dict[str, list] = {}
    for profile_key, scenario_key, step in step_rows:
        workflows.setdefault(composite_key(profile_key, scenario_key), []).append(_pair(step))

    products = db.session.execute(select(Product).order_by(Product.product_key)).scalars().all()
    product_capabilities = {p.product_key: [] for p in products}
    cap_rows = db.session.execute(
        select(Product.product_key, ProductCapability)
        .join(ProductCapability, ProductCapability.product_id == Product.id)
        .order_by(Product.product_key, ProductCapability.position)
    ).all()
    for product_key, cap in cap_rows:
        product_capabilities[product_key].append(_pair(cap))

    return {
        "version": SNAPSHOT_VERSION,
        "exported_at": datetime.now(timezone.utc).isoformat(),
        "preset_factors": preset_factors,
        "preset_metadata": preset_metadata,
        "scenario_factors": scenario_factors,
        "scenario_metadata": scenario_metadata,
        "workflows": workflows,
        "product_capabilities": product_capabilities,
        "product_metadata": {p.product_key: p.display_name for p in products},
    }
