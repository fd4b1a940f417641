import const
from storefront.enums.order import PromoType
from storefront.extensions import db
from storefront.models.base import BaseModel, format_datetime, money


class PromoCode(db.Model, BaseModel):
    __tablename__ = "promo_codes"
    __table_args__ = (
        db.CheckConstraint("used_count >= 0", name="ck_promo_codes_used_count"),
    )

    id = db.Column(db.Integer, primary_key=True)
    code = db.Column(db.String(const.MAX_PROMO_CODE_LENGTH), nullable=False, unique=True)
    type = db.Column(db.String(20), nullable=False, default=PromoType.PERCENTAGE.value)
    value = db.Column(db.Numeric(12, 2), nullable=False)
    min_order_amount = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    max_uses = db.Column(db.Integer, nullable=True)
    used_count = db.Column(db.Integer, nullable=False, default=0)
    expires_at = db.Column(db.DateTime, nullable=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    def to_dict(self):
        return {
            "id": self.id,
            "code": self.code,
            "type": self.type,
            "value": money(self.value),
            "minOrderAmount": money(self.min_order_amount),
            "maxUses": self.max_uses,
            "usedCount": self.used_count,
            "expiresAt": format_datetime(self.expires_at),
            "isActive": self.is_active,
            "createdAt": format_datetime(self.created_at),
            "updatedAt": format_datetime(self.updated_at),
        }
