"""Order entity.

A passive record: the repository stores and returns it unchanged.  The
only checks performed are range checks on the numeric fields, so that an
out-of-range value can never reach the store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from orderstore.domain.exceptions import ValidationError

MAX_ORDER_ID = 2**64 - 1


def _check_non_negative(name: str, value: int) -> None:
    # bool is an int subclass but never a meaningful quantity or price
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ValidationError(f"{name} cannot be negative, got {value}")


@dataclass
class LineItem:
    """A single purchased item; ``price`` is in the smallest currency unit."""

    item_id: UUID
    quantity: int
    price: int

    def __post_init__(self) -> None:
        _check_non_negative("Quantity", self.quantity)
        _check_non_negative("Price", self.price)


@dataclass
class Order:
    """A customer order keyed by a caller-assigned 64-bit ID.

    ``customer_id`` is an external identifier and is not interpreted here.
    The timestamps are optional and no ordering between them is enforced.
    """

    order_id: int
    customer_id: UUID
    line_items: list[LineItem] = field(default_factory=list)
    created_at: datetime | None = None
    shipped_at: datetime | None = None
    completed_at: datetime | None = None

    def __post_init__(self) -> None:
        _check_non_negative("Order ID", self.order_id)
        if self.order_id > MAX_ORDER_ID:
            raise ValidationError(
                f"Order ID {self.order_id} exceeds the 64-bit maximum"
            )
