import uuid

from storefront.extensions import db
from storefront.models.base import BaseModel, money


class Product(db.Model, BaseModel):
    __tablename__ = "products"
    __table_args__ = (
        db.CheckConstraint("stock_qty >= 0", name="ck_products_stock_qty_non_negative"),
    )

    id = db.Column(db.String(36), primary_key=True, default=lambda: uuid.uuid4().hex)
    name_en = db.Column(db.String(255), nullable=False)
    name_bn = db.Column(db.String(255), nullable=False, default="")
    base_price = db.Column(db.Numeric(12, 2), nullable=False)
    sale_price = db.Column(db.Numeric(12, 2), nullable=True)
    stock_qty = db.Column(db.Integer, nullable=False, default=0)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    @property
    def effective_price(self):
        """Sale price when one is set, otherwise the base price."""
        if self.sale_price is not None and self.sale_price > 0:
            return self.sale_price
        return self.base_price

    def to_dict(self):
        return {
            "id": self.id,
            "nameEn": self.name_en,
            "nameBn": self.name_bn,
            "basePrice": money(self.base_price),
            "salePrice": money(self.sale_price),
            "stockQty": self.stock_qty,
            "isActive": self.is_active,
        }
