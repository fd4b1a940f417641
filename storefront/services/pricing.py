from collections import OrderedDict
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy import select

from storefront.errors.exceptions import ConflictError, NotFoundError
from storefront.extensions import db
from storefront.lib.string import serialize_variant_info
from storefront.models.base import to_decimal
from storefront.models.product import Product


@dataclass(frozen=True)
class PricedItem:
    product_id: str
    name_en: str
    name_bn: str
    unit_price: Decimal
    quantity: int
    variant_info: Optional[str]
    stock_qty: int
    is_active: bool

    @property
    def line_total(self):
        return self.unit_price * self.quantity


def requested_quantities(items) -> Dict[str, int]:
    """Total quantity per product id, in first-seen order.

    The same product can appear on several lines with different variants;
    stock has to cover their sum.
    """
    totals = OrderedDict()
    for item in items:
        totals[item.product_id] = totals.get(item.product_id, 0) + item.quantity
    return totals


def insufficient_stock(product_name, requested, available):
    return ConflictError(
        f'Insufficient stock for "{product_name}". '
        f"Requested: {requested}, available: {available}.",
        extra={"reason": "insufficient_stock"},
    )


def product_unavailable(product_name):
    return ConflictError(
        f"Product is no longer available: {product_name}",
        extra={"reason": "product_inactive"},
    )


def product_not_found(product_id):
    return NotFoundError(f"Product not found: {product_id}")


class PricingService:

    @staticmethod
    def load_products(product_ids, session=None):
        session = session or db.session
        rows = session.execute(
            select(Product).where(Product.id.in_(list(product_ids)))
        ).scalars()
        return {product.id: product for product in rows}

    @staticmethod
    def resolve(items, session=None) -> List[PricedItem]:
        """Price every requested line from the catalog.

        Client-supplied prices and names are never consulted. Stock here is a
        snapshot; the order transaction re-checks it when decrementing.
        """
        totals = requested_quantities(items)
        products = PricingService.load_products(totals.keys(), session=session)

        for product_id, requested in totals.items():
            product = products.get(product_id)
            if product is None:
                raise product_not_found(product_id)
            if not product.is_active:
                raise product_unavailable(product.name_en)
            if product.stock_qty < requested:
                raise insufficient_stock(product.name_en, requested, product.stock_qty)

        priced = []
        for item in items:
            product = products[item.product_id]
            priced.append(
                PricedItem(
                    product_id=product.id,
                    name_en=product.name_en,
                    name_bn=product.name_bn or "",
                    unit_price=to_decimal(product.effective_price),
                    quantity=item.quantity,
                    variant_info=serialize_variant_info(item.selected_variants),
                    stock_qty=product.stock_qty,
                    is_active=product.is_active,
                )
            )
        return priced

    @staticmethod
    def subtotal(priced_items) -> Decimal:
        return sum((item.line_total for item in priced_items), Decimal("0"))
