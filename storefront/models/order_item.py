import const
from storefront.extensions import db
from storefront.models.base import BaseModel, money


class OrderItem(db.Model, BaseModel):
    """Snapshot of one purchased line.

    `product_id` is deliberately not a foreign key: names and prices are
    copied at purchase time so catalog edits never rewrite order history.
    """

    __tablename__ = "order_items"

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(
        db.Integer, db.ForeignKey("orders.id", ondelete="CASCADE"), nullable=False
    )
    product_id = db.Column(db.String(36), nullable=False, index=True)
    product_name_en = db.Column(db.String(255), nullable=False)
    product_name_bn = db.Column(db.String(255), nullable=False, default="")
    variant_info = db.Column(db.String(const.MAX_VARIANT_INFO_LENGTH), nullable=True)
    unit_price = db.Column(db.Numeric(12, 2), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    total = db.Column(db.Numeric(12, 2), nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "productId": self.product_id,
            "productNameEn": self.product_name_en,
            "productNameBn": self.product_name_bn,
            "variantInfo": self.variant_info,
            "unitPrice": money(self.unit_price),
            "quantity": self.quantity,
            "total": money(self.total),
        }
