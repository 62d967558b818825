"""
Customer Model Service
Profile domain models — Profile → Scenario → WorkflowStep.

Models:
    - Profile: customer archetype scored on expertise / AI capability / governance
    - Scenario: usage scenario under a profile, scored on importance / complexity / maturity
    - WorkflowStep: one (dev approach, partner approach) pair at a 1-based position
"""

from customer_model.models import (
    SCORE_DEFAULT,
    db,
    id_text,
    iso,
    new_id,
    score_range_check,
    utcnow,
)

PROFILE_SCORE_FIELDS = ("expertise", "aicapability", "governance")
SCENARIO_SCORE_FIELDS = ("importance", "complexity", "maturity")


class Profile(db.Model):
    """
    Customer archetype.

    Deleting a profile removes its scenarios and, through them, their
    workflow steps (ORM cascade + ON DELETE CASCADE).
    """

    __tablename__ = "profiles"
    __table_args__ = tuple(score_range_check(f, "profiles") for f in PROFILE_SCORE_FIELDS)

    id = db.Column(db.Uuid, primary_key=True, default=new_id)
    profile_key = db.Column(db.String(100), unique=True, nullable=False)
    display_name = db.Column(db.String(200), nullable=False)

    expertise = db.Column(db.Integer, nullable=False, default=SCORE_DEFAULT)
    aicapability = db.Column(db.Integer, nullable=False, default=SCORE_DEFAULT)
    governance = db.Column(db.Integer, nullable=False, default=SCORE_DEFAULT)

    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    scenarios = db.relationship(
        "Scenario", backref="profile",
        cascade="all, delete-orphan", passive_deletes=True,
        order_by="Scenario.scenario_key",
    )

    def to_dict(self):
        return {
            "id": id_text(self.id),
            "profile_key": self.profile_key,
            "display_name": self.display_name,
            "expertise": self.expertise,
            "aicapability": self.aicapability,
            "governance": self.governance,
            "created_at": iso(self.created_at),
            "updated_at": iso(self.updated_at),
        }

    def __repr__(self):
        return f"<Profile {self.profile_key}>"


class Scenario(db.Model):
    """
    Scenario scoped to one profile.

    Addressed from outside by the composite key (profile_key, scenario_key);
    scenario_key is unique only within its profile.
    """

    __tablename__ = "scenarios"
    __table_args__ = (
        db.UniqueConstraint("profile_id", "scenario_key", name="uq_scenarios_profile_key"),
        *(score_range_check(f, "scenarios") for f in SCENARIO_SCORE_FIELDS),
    )

    id = db.Column(db.Uuid, primary_key=True, default=new_id)
    profile_id = db.Column(
        db.Uuid, db.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    scenario_key = db.Column(db.String(100), nullable=False)
    display_name = db.Column(db.String(200), nullable=False)

    importance = db.Column(db.Integer, nullable=False, default=SCORE_DEFAULT)
    complexity = db.Column(db.Integer, nullable=False, default=SCORE_DEFAULT)
    maturity = db.Column(db.Integer, nullable=False, default=SCORE_DEFAULT)

    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    steps = db.relationship(
        "WorkflowStep", backref="scenario",
        cascade="all, delete-orphan", passive_deletes=True,
        order_by="WorkflowStep.step_index",
    )

    def to_dict(self):
        return {
            "id": id_text(self.id),
            "profile_id": id_text(self.profile_id),
            "profile_key": self.profile.profile_key,
            "scenario_key": self.scenario_key,
            "display_name": self.display_name,
            "importance": self.importance,
            "complexity": self.complexity,
            "maturity": self.maturity,
            "created_at": iso(self.created_at),
            "updated_at": iso(self.updated_at),
        }

    def __repr__(self):
        return f"<Scenario {self.scenario_key}>"


class WorkflowStep(db.Model):
    """One ordered step of a scenario's workflow. Rows are only ever replaced wholesale."""

    __tablename__ = "workflow_steps"
    __table_args__ = (
        db.UniqueConstraint("scenario_id", "step_index", name="uq_workflow_steps_position"),
    )

    id = db.Column(db.Uuid, primary_key=True, default=new_id)
    scenario_id = db.Column(
        db.Uuid, db.ForeignKey("scenarios.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    step_index = db.Column(db.Integer, nullable=False, comment="1-based position")
    dev_approach_id = db.Column(db.Uuid, db.ForeignKey("dev_approaches.id"), nullable=False)
    partner_approach_id = db.Column(db.Uuid, db.ForeignKey("partner_approaches.id"), nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    dev_approach = db.relationship("DevApproach", lazy="joined")
    partner_approach = db.relationship("PartnerApproach", lazy="joined")

    def to_dict(self):
        return {
            "id": id_text(self.id),
            "scenario_id": id_text(self.scenario_id),
            "step_index": self.step_index,
            "dev_approach_slug": self.dev_approach.slug,
            "dev_approach_name": self.dev_approach.name,
            "partner_approach_slug": self.partner_approach.slug,
            "partner_approach_name": self.partner_approach.name,
            "created_at": iso(self.created_at),
            "updated_at": iso(self.updated_at),
        }
