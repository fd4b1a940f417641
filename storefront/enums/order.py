from enum import Enum


class PaymentMethod(str, Enum):
    COD = "COD"  # Cash on delivery
    BKASH = "BKASH"
    NAGAD = "NAGAD"
    ROCKET = "ROCKET"


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class PromoType(str, Enum):
    PERCENTAGE = "PERCENTAGE"
    FIXED = "FIXED"


def enum_values(enum_cls):
    return [item.value for item in enum_cls]
