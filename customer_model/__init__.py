"""
Customer Model Service
Flask Application Factory.

Usage:
    from customer_model import create_app
    app = create_app()           # defaults to "development"
    app = create_app("testing")  # explicit config
"""

import logging
import os

from flask import Flask, jsonify, request
from flask_cors import CORS
from flask_migrate import Migrate
from sqlalchemy import engine as _sa_engine
from sqlalchemy import event as _sa_event
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException

from customer_model.config import config
from customer_model.core.db_settings import resolve_database_uri
from customer_model.core.exceptions import ConflictError, NotFoundError, SlugResolutionError, ValidationError
from customer_model.middleware.logging_config import configure_logging
from customer_model.middleware.timing import init_request_timing
from customer_model.models import db, dispose_engine
from customer_model.utils.errors import E, api_error

logger = logging.getLogger(__name__)


# ── SQLite FK enforcement (global engine event) ─────────────────────────
@_sa_event.listens_for(_sa_engine.Engine, "connect")
def _enable_sqlite_fk(dbapi_conn, connection_record):
    """Enable foreign key enforcement (and so ON DELETE CASCADE) for SQLite connections."""
    if "sqlite" in type(dbapi_conn).__module__:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


migrate = Migrate()


def _configure_database(app):
    """Resolve the database URI lazily so config import never reaches a secret store."""
    if not app.config.get("SQLALCHEMY_DATABASE_URI"):
        uri = resolve_database_uri(fallback=app.config.get("LOCAL_DATABASE_URI"))
        if not uri:
            raise RuntimeError(
                "Database is not configured: set DATABASE_URL, DB_HOST or DB_SECRET_PROJECT"
            )
        app.config["SQLALCHEMY_DATABASE_URI"] = uri

    if app.config["SQLALCHEMY_DATABASE_URI"].startswith("sqlite"):
        # Pool sizing does not apply to SQLite's pool classes
        app.config["SQLALCHEMY_ENGINE_OPTIONS"] = {}
        if ":memory:" not in app.config["SQLALCHEMY_DATABASE_URI"]:
            os.makedirs(app.instance_path, exist_ok=True)


def _register_error_handlers(app):
    """Map service exceptions to JSON responses. The single place a request's error becomes a status."""

    @app.errorhandler(SlugResolutionError)
    def _handle_slug_resolution(error):
        return api_error(
            E.VALIDATION_REFERENCE, str(error),
            details=error.details,
            dev_approach=error.dev_approach,
            partner_approach=error.partner_approach,
        )

    @app.errorhandler(ValidationError)
    def _handle_validation(error):
        code = E.VALIDATION_REQUIRED if "required" in error.details.values() else E.VALIDATION_INVALID
        return api_error(code, str(error), details=error.details)

    @app.errorhandler(NotFoundError)
    def _handle_not_found(error):
        logger.debug("Lookup miss: %s key=%s", error.resource, error.resource_id)
        return api_error(E.NOT_FOUND, str(error))

    @app.errorhandler(ConflictError)
    def _handle_conflict(error):
        logger.warning("Conflict: %s", error)
        return api_error(E.CONFLICT_DUPLICATE, str(error), details={"field": error.field})

    @app.errorhandler(IntegrityError)
    def _handle_integrity(error):
        db.session.rollback()
        logger.warning("Integrity error: %s", error.orig)
        return api_error(E.CONFLICT_DUPLICATE, "Duplicate or constraint violation")

    @app.errorhandler(404)
    def _not_found(e):
        return api_error(E.NOT_FOUND, "Not found", path=request.path)

    @app.errorhandler(405)
    def _method_not_allowed(e):
        return api_error(E.METHOD_NOT_ALLOWED, "Method not allowed")

    @app.errorhandler(Exception)
    def _handle_unexpected(error):
        if isinstance(error, HTTPException):
            return jsonify({"error": error.description}), error.code
        db.session.rollback()
        logger.exception("Unhandled error on %s %s endpoint=%s",
                         request.method, request.path, request.endpoint)
        return jsonify({"error": "Internal server error", "detail": str(error)}), 500


def create_app(config_name=None):
    """
    Create and configure the Flask application.

    Args:
        config_name: Configuration environment name.
                     One of: "development", "testing", "production".
                     Defaults to APP_ENV env var, or "development" if unset.

    Returns:
        Configured Flask application instance.
    """
    if config_name is None:
        config_name = os.getenv("APP_ENV", "development")

    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config[config_name])

    # ── Structured logging (must be first) ───────────────────────────────
    configure_logging(app)

    # ── Extensions ───────────────────────────────────────────────────────
    _configure_database(app)
    db.init_app(app)
    migrate.init_app(app, db)
    cors_origins = (app.config.get("CORS_ORIGINS") or "").strip()
    if cors_origins == "*":
        CORS(app)
    elif cors_origins:
        CORS(app, origins=[o.strip() for o in cors_origins.split(",") if o.strip()])
    else:
        # Same-origin only until CORS_ORIGINS names the allowed front-ends
        app.logger.warning("CORS_ORIGINS is empty: cross-origin requests are not allowed")

    # ── Request timing middleware ────────────────────────────────────────
    init_request_timing(app)

    # ── Request guard (Content-Type) ─────────────────────────────────────
    @app.before_request
    def _guard_request():
        if request.method in ("POST", "PUT") and request.path.startswith("/api/"):
            ct = request.content_type or ""
            if request.data and "json" not in ct:
                return api_error(
                    E.VALIDATION_INVALID, "Content-Type must be application/json", status=415,
                )
        return None

    # ── Import all models so metadata / Alembic see them ─────────────────
    from customer_model.models import product as _product_models        # noqa: F401
    from customer_model.models import profile as _profile_models        # noqa: F401
    from customer_model.models import vocabulary as _vocabulary_models  # noqa: F401

    # ── Auto-create tables (CREATE IF NOT EXISTS) ────────────────────────
    with app.app_context():
        try:
            db.create_all()
            app.logger.info("db.create_all() completed successfully")
        except Exception as e:
            app.logger.warning("db.create_all() failed: %s", e)

    # ── Blueprints ───────────────────────────────────────────────────────
    from customer_model.blueprints import register_blueprints
    register_blueprints(app)

    # ── Error handlers ───────────────────────────────────────────────────
    _register_error_handlers(app)

    # ── CLI commands ─────────────────────────────────────────────────────
    @app.cli.command("seed-vocabularies")
    def seed_vocabularies_cmd():
        """Seed the default dev and partner approaches (existing slugs are kept)."""
        from customer_model.services.seed_service import seed_default_vocabularies
        count = seed_default_vocabularies()
        db.session.commit()
        logger.info("Seeded %s new vocabulary approaches.", count)

    return app


def shutdown_app(app):
    """Dispose the shared connection pool; the next request would lazily rebuild it."""
    dispose_engine(app)
    app.logger.info("Database connection pool disposed")
