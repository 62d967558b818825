"""
Customer Model Service
SQLAlchemy instance shared by every model module, plus the helpers that keep
storage representations (UUID objects, datetimes) inside the model layer.
"""

import uuid
from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

SCORE_MIN = 0
SCORE_MAX = 100
SCORE_DEFAULT = 50


def utcnow():
    return datetime.now(timezone.utc)


def new_id():
    return uuid.uuid4()


def id_text(value):
    """Canonical lowercase-hyphenated form of a UUID column value."""
    return str(value) if value is not None else None


def iso(value):
    """ISO-8601 text in UTC. SQLite hands back naive datetimes; those are stored as UTC."""
    if not value:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def score_range_check(column: str, table: str):
    """CHECK constraint keeping an integer score within SCORE_MIN..SCORE_MAX."""
    return db.CheckConstraint(
        f"{column} BETWEEN {SCORE_MIN} AND {SCORE_MAX}",
        name=f"ck_{table}_{column}_range",
    )


def dispose_engine(app):
    """Release every pooled connection held by the app's engine."""
    with app.app_context():
        db.engine.dispose()
