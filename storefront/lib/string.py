import re
import secrets
import string
import threading
import time

import const

BASE36_ALPHABET = string.digits + string.ascii_uppercase

_order_number_lock = threading.Lock()
_last_order_millis = 0


def to_base36(number):
    if number < 0:
        raise ValueError("number must be non-negative")
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def _next_order_millis():
    # Strictly increasing within the process, even for calls in the same millisecond.
    global _last_order_millis
    with _order_number_lock:
        now = int(time.time() * 1000)
        _last_order_millis = max(now, _last_order_millis + 1)
        return _last_order_millis


def generate_order_number(prefix=const.ORDER_NUMBER_PREFIX):
    """Human readable order number, e.g. ``EID-LK3R2FAB7X2Q``.

    Base-36 time component followed by a random suffix so numbers from
    different worker processes are very unlikely to collide.
    """
    suffix = "".join(
        secrets.choice(BASE36_ALPHABET)
        for _ in range(const.ORDER_NUMBER_SUFFIX_LENGTH)
    )
    return f"{prefix}-{to_base36(_next_order_millis())}{suffix}"


def serialize_variant_info(variants):
    """``{"size": "M", "color": "Red"}`` -> ``"size: M, color: Red"``."""
    if not variants:
        return None
    return ", ".join(f"{key}: {value}" for key, value in variants.items())


def normalize_phone(phone):
    return re.sub(r"\D", "", phone or "")


def format_money(amount):
    """``1000`` -> ``"৳1,000"``, ``99.5`` -> ``"৳99.50"``."""
    if amount == int(amount):
        return f"{const.CURRENCY_SYMBOL}{int(amount):,}"
    return f"{const.CURRENCY_SYMBOL}{amount:,.2f}"
