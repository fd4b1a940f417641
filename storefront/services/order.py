import time
from decimal import Decimal

from flask import current_app
from sqlalchemy import or_, select, text, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.enums.messages import PromoRejection
from storefront.enums.order import OrderStatus, PaymentStatus
from storefront.errors.exceptions import (
    BaseError,
    InternalError,
    NotFoundError,
    PromoCodeRejected,
    TransactionTimeout,
)
from storefront.extensions import db
from storefront.lib.logger import logger
from storefront.lib.string import generate_order_number
from storefront.models.base import utc_now
from storefront.models.order import Order
from storefront.models.order_item import OrderItem
from storefront.models.product import Product
from storefront.models.promo_code import PromoCode
from storefront.services.pricing import (
    PricingService,
    insufficient_stock,
    product_not_found,
    product_unavailable,
    requested_quantities,
)
from storefront.services.promo_code import PromoCodeService


def apply_transaction_timeout(session, seconds):
    """Bound how long the transaction may wait on row locks."""
    seconds = int(seconds)
    dialect = session.get_bind().dialect.name
    if dialect == "mysql":
        session.execute(text(f"SET SESSION innodb_lock_wait_timeout = {seconds}"))
    elif dialect == "postgresql":
        session.execute(text(f"SET LOCAL lock_timeout = '{seconds}s'"))
        session.execute(text(f"SET LOCAL statement_timeout = '{seconds}s'"))


def reset_transaction_timeout(connection):
    """Put a MySQL connection back on the server's lock wait timeout before it
    returns to the pool."""
    if connection.dialect.name == "mysql":
        connection.execute(text("SET SESSION innodb_lock_wait_timeout = DEFAULT"))


def reserve_stock(session, product_id, quantity):
    """Decrement stock only if enough is left; the check and write are one statement."""
    result = session.execute(
        update(Product)
        .where(
            Product.id == product_id,
            Product.is_active.is_(True),
            Product.stock_qty >= quantity,
        )
        .values(stock_qty=Product.stock_qty - quantity)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 1:
        return

    product = session.get(Product, product_id)
    if product is None:
        raise product_not_found(product_id)
    if not product.is_active:
        raise product_unavailable(product.name_en)
    raise insufficient_stock(product.name_en, quantity, product.stock_qty)


def redeem_promo(session, promo):
    """Count one use of the promo code unless it stopped being redeemable."""
    now = utc_now()
    result = session.execute(
        update(PromoCode)
        .where(
            PromoCode.id == promo.promo_id,
            PromoCode.is_active.is_(True),
            or_(
                PromoCode.max_uses.is_(None),
                PromoCode.used_count < PromoCode.max_uses,
            ),
            or_(PromoCode.expires_at.is_(None), PromoCode.expires_at >= now),
        )
        .values(used_count=PromoCode.used_count + 1)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise PromoCodeRejected(PromoRejection.UNAVAILABLE)


class OrderService:

    @staticmethod
    def place_order(order_request):
        """Price, discount and persist a checkout in one go.

        :returns: the committed, detached `Order`.
        """
        try:
            priced_items = PricingService.resolve(order_request.items)
            subtotal = PricingService.subtotal(priced_items)
            promo = PromoCodeService.evaluate(order_request.promo_code, subtotal)
        finally:
            # Release the read snapshot before the write transaction starts.
            db.session.rollback()

        return OrderService.write_order(order_request, priced_items, promo)

    @staticmethod
    def write_order(order_request, priced_items, promo=None):
        attempts = current_app.config.get("ORDER_NUMBER_ATTEMPTS", 3)
        for attempt in range(1, attempts + 1):
            order_number = generate_order_number()
            try:
                order = OrderService._write_order_once(
                    order_number, order_request, priced_items, promo
                )
            except BaseError:
                raise
            except IntegrityError as e:
                if "order_number" not in str(e.orig):
                    logger.opt(exception=e).error(f"Order write failed: {e.orig}")
                    raise InternalError("Order could not be saved") from e
                logger.warning(
                    f"Order write failed on integrity check for {order_number} "
                    f"(attempt {attempt}/{attempts}): {e.orig}"
                )
                continue
            except SQLAlchemyError as e:
                logger.opt(exception=e).error(f"Order write failed: {e}")
                raise InternalError("Order could not be saved") from e

            logger.info(
                f"Order {order.order_number} placed: total={order.total} "
                f"items={len(priced_items)} promo={order.promo_code or '-'}"
            )
            return order

        raise InternalError("Could not allocate a unique order number")

    @staticmethod
    def _write_order_once(order_number, order_request, priced_items, promo):
        timeout = current_app.config.get("ORDER_TRANSACTION_TIMEOUT", 10)
        deadline = time.monotonic() + timeout

        subtotal = PricingService.subtotal(priced_items)
        discount = promo.discount if promo else Decimal("0")
        total = max(subtotal - discount, Decimal("0"))

        with db.engine.connect() as connection:
            try:
                with Session(bind=connection, expire_on_commit=False) as session:
                    with session.begin():
                        apply_transaction_timeout(session, timeout)

                        # Sorted so concurrent orders lock products in the same order.
                        for product_id, quantity in sorted(
                            requested_quantities(priced_items).items()
                        ):
                            reserve_stock(session, product_id, quantity)

                        if promo is not None:
                            redeem_promo(session, promo)

                        order = Order(
                            order_number=order_number,
                            customer_name=order_request.customer_name,
                            customer_phone=order_request.customer_phone,
                            customer_address=order_request.customer_address,
                            payment_method=order_request.payment_method.value,
                            payment_status=PaymentStatus.PENDING.value,
                            transaction_id=order_request.transaction_id,
                            order_status=OrderStatus.PENDING.value,
                            subtotal=subtotal,
                            discount=discount,
                            total=total,
                            promo_code=promo.code if promo else None,
                        )
                        order.items = [
                            OrderItem(
                                product_id=item.product_id,
                                product_name_en=item.name_en,
                                product_name_bn=item.name_bn,
                                variant_info=item.variant_info,
                                unit_price=item.unit_price,
                                quantity=item.quantity,
                                total=item.line_total,
                            )
                            for item in priced_items
                        ]
                        session.add(order)
                        session.flush()

                        if time.monotonic() > deadline:
                            raise TransactionTimeout()
            finally:
                reset_transaction_timeout(connection)

        return order

    @staticmethod
    def find_order(order_id):
        order = db.session.get(Order, order_id)
        if not order:
            raise NotFoundError("Order not found")
        return order

    @staticmethod
    def get_orders(page=1, limit=20, status=None, search=""):
        query = select(Order)
        if status:
            query = query.where(Order.order_status == status)
        if search:
            pattern = f"%{search}%"
            query = query.where(
                or_(
                    Order.order_number.ilike(pattern),
                    Order.customer_name.ilike(pattern),
                    Order.customer_phone.ilike(pattern),
                )
            )
        query = query.order_by(Order.created_at.desc(), Order.id.desc())
        return db.paginate(query, page=page, per_page=limit, error_out=False)

    @staticmethod
    def update_order(order_id, **kwargs):
        """Apply admin changes; returns the order and its status before the change."""
        order = OrderService.find_order(order_id)
        previous_status = order.order_status
        order.update(**kwargs)
        return order, previous_status
