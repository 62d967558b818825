"""
Customer Model Service
Blueprint registry.
"""

from customer_model.blueprints.health_bp import health_bp
from customer_model.blueprints.product_bp import product_bp
from customer_model.blueprints.profile_bp import profile_bp
from customer_model.blueprints.scenario_bp import scenario_bp
from customer_model.blueprints.snapshot_bp import snapshot_bp
from customer_model.blueprints.vocabulary_bp import vocabulary_bp
from customer_model.blueprints.workflow_step_bp import workflow_step_bp

ALL_BLUEPRINTS = (
    health_bp,
    vocabulary_bp,
    profile_bp,
    scenario_bp,
    workflow_step_bp,
    product_bp,
    snapshot_bp,
)


def register_blueprints(app):
    for bp in ALL_BLUEPRINTS:
        app.register_blueprint(bp)
