from enum import Enum


class SmsMessage(Enum):
    ORDER_PLACED = "আপনার অর্ডার {order_number} সফলভাবে প্লেস হয়েছে। ধন্যবাদ!"
    ORDER_CONFIRMED = "আপনার অর্ডার {order_number} কনফার্ম হয়েছে।"
    ORDER_SHIPPED = "আপনার অর্ডার {order_number} শিপ করা হয়েছে।"

    def format(self, **kwargs):
        return self.value.format(**kwargs)


class PromoRejection(Enum):
    """Reason code and human message for each way a promo code can fail."""

    NOT_FOUND = ("promo_not_found", "Promo code not found.")
    INACTIVE = ("promo_inactive", "Promo code is no longer active.")
    EXPIRED = ("promo_expired", "Promo code has expired.")
    USAGE_LIMIT = ("promo_usage_limit", "Promo code has reached its usage limit.")
    MIN_ORDER = (
        "promo_min_order",
        "Minimum order amount for this promo code is {minimum}.",
    )
    UNAVAILABLE = ("promo_unavailable", "Promo code is no longer valid.")

    @property
    def reason_code(self):
        return self.value[0]

    def message(self, **kwargs):
        return self.value[1].format(**kwargs)
