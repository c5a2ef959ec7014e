"""Store key layout.

Redis is a flat key/value store, so every order lives under a key built
from a fixed prefix and its decimal ID.  The decimal form is canonical
(no padding, no sign), which makes the mapping injective.
"""

from __future__ import annotations

from orderstore.domain.exceptions import ValidationError
from orderstore.domain.model.order import MAX_ORDER_ID

DEFAULT_KEY_PREFIX = "order"
DEFAULT_INDEX_KEY = "orders"


def order_key(order_id: int, prefix: str = DEFAULT_KEY_PREFIX) -> str:
    if not isinstance(order_id, int) or isinstance(order_id, bool):
        raise ValidationError(f"Order ID must be an integer, got {type(order_id).__name__}")
    if not 0 <= order_id <= MAX_ORDER_ID:
        raise ValidationError(f"Order ID {order_id} is outside the 64-bit unsigned range")
    return f"{prefix}:{order_id}"
