import const
from storefront.enums.order import OrderStatus, PaymentStatus
from storefront.extensions import db
from storefront.models.base import BaseModel, format_datetime, money
from storefront.models.order_item import OrderItem


class Order(db.Model, BaseModel):
    __tablename__ = "orders"

    id = db.Column(db.Integer, primary_key=True)
    order_number = db.Column(db.String(50), nullable=False, unique=True)
    customer_name = db.Column(db.String(const.MAX_CUSTOMER_NAME_LENGTH), nullable=False)
    customer_phone = db.Column(db.String(20), nullable=False, index=True)
    customer_address = db.Column(db.Text, nullable=False)
    payment_method = db.Column(db.String(20), nullable=False)
    payment_status = db.Column(
        db.String(20), nullable=False, default=PaymentStatus.PENDING.value
    )
    transaction_id = db.Column(db.String(const.MAX_TRANSACTION_ID_LENGTH), nullable=True)
    order_status = db.Column(
        db.String(20), nullable=False, default=OrderStatus.PENDING.value, index=True
    )
    subtotal = db.Column(db.Numeric(12, 2), nullable=False)
    discount = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    total = db.Column(db.Numeric(12, 2), nullable=False)
    # Code string at the time of purchase, not a live reference
    promo_code = db.Column(db.String(const.MAX_PROMO_CODE_LENGTH), nullable=True)
    notes = db.Column(db.Text, nullable=True)

    items = db.relationship(
        OrderItem,
        backref="order",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by=OrderItem.id,
    )

    def to_dict(self):
        return {
            "id": self.id,
            "orderNumber": self.order_number,
            "customerName": self.customer_name,
            "customerPhone": self.customer_phone,
            "customerAddress": self.customer_address,
            "subtotal": money(self.subtotal),
            "discount": money(self.discount),
            "total": money(self.total),
            "promoCode": self.promo_code,
            "paymentMethod": self.payment_method,
            "paymentStatus": self.payment_status,
            "transactionId": self.transaction_id,
            "orderStatus": self.order_status,
            "notes": self.notes,
            "createdAt": format_datetime(self.created_at),
            "updatedAt": format_datetime(self.updated_at),
            "items": [item.to_dict() for item in self.items],
        }
