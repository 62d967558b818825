"""
Customer Model Service
Vocabulary models — the controlled set of tags that steps and capabilities pair up.

Models:
    - DevApproach: role tag (who does the work)
    - PartnerApproach: focus tag (what the work concentrates on)
"""

from customer_model.models import db, id_text, new_id


class Approach(db.Model):
    """Abstract base for both vocabulary tables."""

    __abstract__ = True

    id = db.Column(db.Uuid, primary_key=True, default=new_id)
    slug = db.Column(db.String(80), unique=True, nullable=False)
    name = db.Column(db.String(120), nullable=False)
    description = db.Column(db.Text, default="")
    sort_order = db.Column(db.Integer, nullable=False, default=0)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    def to_dict(self):
        return {
            "id": id_text(self.id),
            "slug": self.slug,
            "name": self.name,
            "description": self.description,
            "sort_order": self.sort_order,
            "is_active": self.is_active,
        }

    def __repr__(self):
        return f"<{type(self).__name__} {self.slug}>"


class DevApproach(Approach):
    __tablename__ = "dev_approaches"


class PartnerApproach(Approach):
    __tablename__ = "partner_approaches"
