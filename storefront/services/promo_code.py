from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from sqlalchemy import select

from storefront.enums.messages import PromoRejection
from storefront.enums.order import PromoType
from storefront.errors.exceptions import ConflictError, NotFoundError, PromoCodeRejected
from storefront.extensions import db
from storefront.lib.string import format_money
from storefront.models.base import to_decimal, utc_now
from storefront.models.promo_code import PromoCode

CENT = Decimal("0.01")


@dataclass(frozen=True)
class PromoDiscount:
    promo_id: int
    code: str
    type: str
    value: Decimal
    discount: Decimal


def calculate_discount(subtotal, promo_type, value):
    """Discount for a subtotal, never more than the subtotal itself."""
    subtotal = to_decimal(subtotal)
    value = to_decimal(value)
    if promo_type == PromoType.PERCENTAGE.value:
        discount = subtotal * value / Decimal(100)
    else:
        discount = value
    discount = min(discount, subtotal)
    return max(discount, Decimal("0")).quantize(CENT, rounding=ROUND_HALF_UP)


class PromoCodeService:

    @staticmethod
    def find_by_code(code, session=None):
        session = session or db.session
        return session.execute(
            select(PromoCode).where(PromoCode.code == code.strip().upper())
        ).scalar_one_or_none()

    @staticmethod
    def find(promo_id):
        return db.session.get(PromoCode, promo_id)

    @staticmethod
    def evaluate(code, subtotal, session=None) -> Optional[PromoDiscount]:
        """Check a promo code against its rules and price the discount.

        Returns None when no code was supplied. Read-only: usage is counted
        by the order transaction, never here.

        :raises PromoCodeRejected: naming the first rule that failed.
        """
        if not code or not code.strip():
            return None

        promo = PromoCodeService.find_by_code(code, session=session)
        if promo is None:
            raise PromoCodeRejected(PromoRejection.NOT_FOUND)
        if not promo.is_active:
            raise PromoCodeRejected(PromoRejection.INACTIVE)
        if promo.expires_at is not None and promo.expires_at < utc_now():
            raise PromoCodeRejected(PromoRejection.EXPIRED)
        if promo.max_uses is not None and promo.used_count >= promo.max_uses:
            raise PromoCodeRejected(PromoRejection.USAGE_LIMIT)

        minimum = to_decimal(promo.min_order_amount or 0)
        if to_decimal(subtotal) < minimum:
            raise PromoCodeRejected(
                PromoRejection.MIN_ORDER, minimum=format_money(minimum)
            )

        return PromoDiscount(
            promo_id=promo.id,
            code=promo.code,
            type=promo.type,
            value=to_decimal(promo.value),
            discount=calculate_discount(subtotal, promo.type, promo.value),
        )

    @staticmethod
    def get_promo_codes():
        return (
            db.session.execute(
                select(PromoCode).order_by(PromoCode.created_at.desc(), PromoCode.id.desc())
            )
            .scalars()
            .all()
        )

    @staticmethod
    def create_promo_code(**kwargs):
        code = kwargs["code"].strip().upper()
        if PromoCodeService.find_by_code(code):
            raise ConflictError("A promo code with this code already exists")
        kwargs["code"] = code
        promo = PromoCode(**kwargs)
        promo.save()
        return promo

    @staticmethod
    def update_promo_code(promo_id, **kwargs):
        promo = PromoCodeService.find(promo_id)
        if not promo:
            raise NotFoundError("Promo code not found")
        if "code" in kwargs:
            kwargs["code"] = kwargs["code"].strip().upper()
            existing = PromoCodeService.find_by_code(kwargs["code"])
            if existing and existing.id != promo.id:
                raise ConflictError("A promo code with this code already exists")
        promo.update(**kwargs)
        return promo

    @staticmethod
    def delete_promo_code(promo_id):
        promo = PromoCodeService.find(promo_id)
        if not promo:
            raise NotFoundError("Promo code not found")
        promo.delete()
        return True
