"""Checks the raw checkout payload and turns it into an `OrderRequest`.

Pure functions only: nothing here touches the database, so a rejected
payload never costs a query.
"""
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import const
from storefront.enums.order import PaymentMethod, enum_values
from storefront.errors.exceptions import ValidationError
from storefront.lib.string import serialize_variant_info

PHONE_RE = re.compile(const.PHONE_PATTERN)


@dataclass(frozen=True)
class OrderItemRequest:
    product_id: str
    quantity: int
    selected_variants: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class OrderRequest:
    customer_name: str
    customer_phone: str
    customer_address: str
    payment_method: PaymentMethod
    items: List[OrderItemRequest]
    transaction_id: Optional[str] = None
    promo_code: Optional[str] = None


def _field_error(field_name, message):
    return {"field": field_name, "message": message}


def _too_long(field_name, maximum):
    return _field_error(field_name, f"{field_name} must be at most {maximum} characters.")


def _clean_str(value):
    return value.strip() if isinstance(value, str) else None


def _is_positive_int(value):
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value >= 1
    if isinstance(value, float) and value.is_integer():
        return value >= 1
    return False


def _validate_items(items, errors):
    if not isinstance(items, list) or len(items) == 0:
        errors.append(_field_error("items", "items must be a non-empty array."))
        return []

    cleaned = []
    for idx, item in enumerate(items):
        prefix = f"items[{idx}]"
        if not isinstance(item, dict):
            errors.append(_field_error(prefix, f"{prefix} must be an object."))
            continue

        product_id = _clean_str(item.get("productId"))
        quantity = item.get("quantity")
        variants = item.get("selectedVariants")
        item_ok = True

        if not product_id:
            errors.append(
                _field_error(f"{prefix}.productId", f"{prefix}.productId is required.")
            )
            item_ok = False
        if not _is_positive_int(quantity):
            errors.append(
                _field_error(
                    f"{prefix}.quantity",
                    f"{prefix}.quantity must be a positive integer.",
                )
            )
            item_ok = False
        if variants is not None and not (
            isinstance(variants, dict)
            and all(isinstance(v, str) for v in variants.values())
        ):
            errors.append(
                _field_error(
                    f"{prefix}.selectedVariants",
                    f"{prefix}.selectedVariants must be an object of strings.",
                )
            )
            item_ok = False
        elif (
            variants
            and len(serialize_variant_info(variants)) > const.MAX_VARIANT_INFO_LENGTH
        ):
            errors.append(
                _field_error(
                    f"{prefix}.selectedVariants",
                    f"{prefix}.selectedVariants must fit in "
                    f"{const.MAX_VARIANT_INFO_LENGTH} characters.",
                )
            )
            item_ok = False

        if item_ok:
            cleaned.append(
                OrderItemRequest(
                    product_id=product_id,
                    quantity=int(quantity),
                    selected_variants=dict(variants or {}),
                )
            )
    return cleaned


def validate_order_request(body):
    """Validate a checkout payload.

    Every problem is collected before raising, so the client can fix the
    whole form in one round trip.

    :raises ValidationError: with ``errors`` listing each failed field.
    """
    if not isinstance(body, dict):
        raise ValidationError(
            "Request body must be a JSON object.",
            errors=[_field_error("body", "Request body must be a JSON object.")],
        )

    errors = []

    customer_name = _clean_str(body.get("customerName"))
    if not customer_name or len(customer_name) < const.MIN_CUSTOMER_NAME_LENGTH:
        errors.append(
            _field_error(
                "customerName",
                f"customerName must be at least {const.MIN_CUSTOMER_NAME_LENGTH} characters.",
            )
        )
    elif len(customer_name) > const.MAX_CUSTOMER_NAME_LENGTH:
        errors.append(_too_long("customerName", const.MAX_CUSTOMER_NAME_LENGTH))

    customer_phone = _clean_str(body.get("customerPhone"))
    if not customer_phone or not PHONE_RE.match(customer_phone):
        errors.append(
            _field_error(
                "customerPhone",
                "customerPhone must be a valid Bangladeshi mobile number (01XXXXXXXXX).",
            )
        )

    customer_address = _clean_str(body.get("customerAddress"))
    if (
        not customer_address
        or len(customer_address) < const.MIN_CUSTOMER_ADDRESS_LENGTH
    ):
        errors.append(
            _field_error(
                "customerAddress",
                f"customerAddress must be at least {const.MIN_CUSTOMER_ADDRESS_LENGTH} characters.",
            )
        )
    elif len(customer_address) > const.MAX_CUSTOMER_ADDRESS_LENGTH:
        errors.append(_too_long("customerAddress", const.MAX_CUSTOMER_ADDRESS_LENGTH))

    payment_method = None
    raw_method = body.get("paymentMethod")
    if isinstance(raw_method, str) and raw_method in enum_values(PaymentMethod):
        payment_method = PaymentMethod(raw_method)
    else:
        errors.append(
            _field_error(
                "paymentMethod",
                f"paymentMethod must be one of: {', '.join(enum_values(PaymentMethod))}.",
            )
        )

    transaction_id = _clean_str(body.get("transactionId")) or None
    if (
        payment_method is not None
        and payment_method != PaymentMethod.COD
        and not transaction_id
    ):
        errors.append(
            _field_error(
                "transactionId",
                "transactionId is required for mobile banking payments.",
            )
        )
    elif transaction_id and len(transaction_id) > const.MAX_TRANSACTION_ID_LENGTH:
        errors.append(_too_long("transactionId", const.MAX_TRANSACTION_ID_LENGTH))

    raw_promo = body.get("promoCode")
    promo_code = None
    if raw_promo is not None:
        if isinstance(raw_promo, str):
            promo_code = raw_promo.strip().upper() or None
            if promo_code and len(promo_code) > const.MAX_PROMO_CODE_LENGTH:
                errors.append(_too_long("promoCode", const.MAX_PROMO_CODE_LENGTH))
        else:
            errors.append(_field_error("promoCode", "promoCode must be a string."))

    if "items" not in body:
        errors.append(_field_error("items", "items is required."))
        items = []
    else:
        items = _validate_items(body.get("items"), errors)

    if errors:
        raise ValidationError("Validation failed", errors=errors)

    return OrderRequest(
        customer_name=customer_name,
        customer_phone=customer_phone,
        customer_address=customer_address,
        payment_method=payment_method,
        items=items,
        transaction_id=transaction_id,
        promo_code=promo_code,
    )
