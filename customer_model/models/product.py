"""
Customer Model Service
Product models — Product → ProductCapability (ordered role/focus pairs).
"""

from customer_model.models import db, id_text, new_id


class Product(db.Model):
    __tablename__ = "products"

    id = db.Column(db.Uuid, primary_key=True, default=new_id)
    product_key = db.Column(db.String(100), unique=True, nullable=False)
    display_name = db.Column(db.String(200), nullable=False)

    capabilities = db.relationship(
        "ProductCapability", backref="product",
        cascade="all, delete-orphan", passive_deletes=True,
        order_by="ProductCapability.position",
    )

    def to_dict(self, capabilities=None):
        """Serialize the product; ``capabilities`` overrides the relationship when pre-fetched."""
        caps = self.capabilities if capabilities is None else capabilities
        return {
            "id": id_text(self.id),
            "product_key": self.product_key,
            "display_name": self.display_name,
            "capabilities": [c.to_dict() for c in caps],
        }

    def __repr__(self):
        return f"<Product {self.product_key}>"


class ProductCapability(db.Model):
    __tablename__ = "product_capabilities"
    __table_args__ = (
        db.UniqueConstraint("product_id", "position", name="uq_product_capabilities_position"),
    )

    id = db.Column(db.Uuid, primary_key=True, default=new_id)
    product_id = db.Column(
        db.Uuid, db.ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    position = db.Column(db.Integer, nullable=False, comment="1-based position")
    dev_approach_id = db.Column(db.Uuid, db.ForeignKey("dev_approaches.id"), nullable=False)
    partner_approach_id = db.Column(db.Uuid, db.ForeignKey("partner_approaches.id"), nullable=False)

    dev_approach = db.relationship("DevApproach", lazy="joined")
    partner_approach = db.relationship("PartnerApproach", lazy="joined")

    def to_dict(self):
        return {
            "id": id_text(self.id),
            "position": self.position,
            "dev_approach_slug": self.dev_approach.slug,
            "dev_approach_name": self.dev_approach.name,
            "partner_approach_slug": self.partner_approach.slug,
            "partner_approach_name": self.partner_approach.name,
        }
