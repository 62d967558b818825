"""Customer model schema — vocabularies, profiles, scenarios, workflow steps, products

Revision ID: a1c3e5f7b902
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "a1c3e5f7b902"
down_revision = None
branch_labels = None
depends_on = None


def _approach_table(name):
    op.create_table(
        name,
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("slug", sa.String(80), nullable=False, unique=True),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
    )


def _score(name):
    return sa.Column(name, sa.Integer(), nullable=False, server_default="50")


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True)),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    ]


def upgrade():
    # ── Vocabularies ──
    _approach_table("dev_approaches")
    _approach_table("partner_approaches")

    # ── Profiles → Scenarios → Workflow steps ──
    op.create_table(
        "profiles",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("profile_key", sa.String(100), nullable=False, unique=True),
        sa.Column("display_name", sa.String(200), nullable=False),
        _score("expertise"),
        _score("aicapability"),
        _score("governance"),
        *_timestamps(),
        sa.CheckConstraint("expertise BETWEEN 0 AND 100", name="ck_profiles_expertise_range"),
        sa.CheckConstraint("aicapability BETWEEN 0 AND 100", name="ck_profiles_aicapability_range"),
        sa.CheckConstraint("governance BETWEEN 0 AND 100", name="ck_profiles_governance_range"),
    )

    op.create_table(
        "scenarios",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "profile_id", sa.Uuid(),
            sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("scenario_key", sa.String(100), nullable=False),
        sa.Column("display_name", sa.String(200), nullable=False),
        _score("importance"),
        _score("complexity"),
        _score("maturity"),
        *_timestamps(),
        sa.UniqueConstraint("profile_id", "scenario_key", name="uq_scenarios_profile_key"),
        sa.CheckConstraint("importance BETWEEN 0 AND 100", name="ck_scenarios_importance_range"),
        sa.CheckConstraint("complexity BETWEEN 0 AND 100", name="ck_scenarios_complexity_range"),
        sa.CheckConstraint("maturity BETWEEN 0 AND 100", name="ck_scenarios_maturity_range"),
    )
    op.create_index("ix_scenarios_profile_id", "scenarios", ["profile_id"])

    op.create_table(
        "workflow_steps",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "scenario_id", sa.Uuid(),
            sa.ForeignKey("scenarios.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("step_index", sa.Integer(), nullable=False, comment="1-based position"),
        sa.Column("dev_approach_id", sa.Uuid(), sa.ForeignKey("dev_approaches.id"), nullable=False),
        sa.Column("partner_approach_id", sa.Uuid(), sa.ForeignKey("partner_approaches.id"), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("scenario_id", "step_index", name="uq_workflow_steps_position"),
    )
    op.create_index("ix_workflow_steps_scenario_id", "workflow_steps", ["scenario_id"])

    # ── Products → Capabilities ──
    op.create_table(
        "products",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("product_key", sa.String(100), nullable=False, unique=True),
        sa.Column("display_name", sa.String(200), nullable=False),
    )

    op.create_table(
        "product_capabilities",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "product_id", sa.Uuid(),
            sa.ForeignKey("products.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("position", sa.Integer(), nullable=False, comment="1-based position"),
        sa.Column("dev_approach_id", sa.Uuid(), sa.ForeignKey("dev_approaches.id"), nullable=False),
        sa.Column("partner_approach_id", sa.Uuid(), sa.ForeignKey("partner_approaches.id"), nullable=False),
        sa.UniqueConstraint("product_id", "position", name="uq_product_capabilities_position"),
    )
    op.create_index("ix_product_capabilities_product_id", "product_capabilities", ["product_id"])


def downgrade():
    op.drop_index("ix_product_capabilities_product_id", table_name="product_capabilities")
    op.drop_table("product_capabilities")
    op.drop_table("products")
    op.drop_index("ix_workflow_steps_scenario_id", table_name="workflow_steps")
    op.drop_table("workflow_steps")
    op.drop_index("ix_scenarios_profile_id", table_name="scenarios")
    op.drop_table("scenarios")
    op.drop_table("profiles")
    op.drop_table("partner_approaches")
    op.drop_table("dev_approaches")
