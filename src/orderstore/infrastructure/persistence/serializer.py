"""JSON wire format for orders.

The field names (``cust_id`` in particular) are part of the stored
format and must not change without migrating existing records.
"""

from __future__ import annotations

import json
import re
from datetime import datetime
from typing import Any
from uuid import UUID

from orderstore.domain.exceptions import ValidationError
from orderstore.domain.model.order import LineItem, Order


class OrderCodecError(ValueError):
    """An order could not be converted to or from its stored form."""


# --- Raw (dict) form ----------------------------------------------------------


def to_raw(order: Order) -> dict:
    return {
        "order_id": order.order_id,
        "cust_id": str(order.customer_id),
        "line_items": [
            {
                "item_id": str(item.item_id),
                "quantity": item.quantity,
                "price": item.price,
            }
            for item in order.line_items
        ],
        "created_at": _timestamp_to_raw(order.created_at),
        "shipped_at": _timestamp_to_raw(order.shipped_at),
        "completed_at": _timestamp_to_raw(order.completed_at),
    }


def from_raw(raw: dict) -> Order:
    items = [
        LineItem(
            item_id=UUID(i["item_id"]),
            quantity=i["quantity"],
            price=i["price"],
        )
        for i in raw["line_items"] or []
    ]
    return Order(
        order_id=raw["order_id"],
        customer_id=UUID(raw["cust_id"]),
        line_items=items,
        created_at=_timestamp_from_raw(raw.get("created_at")),
        shipped_at=_timestamp_from_raw(raw.get("shipped_at")),
        completed_at=_timestamp_from_raw(raw.get("completed_at")),
    )


# --- Bytes form ---------------------------------------------------------------


def encode_order(order: Order) -> bytes:
    try:
        return json.dumps(to_raw(order), separators=(",", ":")).encode("utf-8")
    except (AttributeError, TypeError, ValueError) as exc:
        raise OrderCodecError(f"cannot encode order: {exc}") from exc


def decode_order(data: bytes | str) -> Order:
    try:
        raw = json.loads(data)
        if not isinstance(raw, dict):
            raise TypeError(f"expected a JSON object, got {type(raw).__name__}")
        return from_raw(raw)
    except (AttributeError, KeyError, TypeError, ValueError, ValidationError) as exc:
        # json.JSONDecodeError and UnicodeDecodeError are ValueErrors
        raise OrderCodecError(f"cannot decode order: {exc!r}") from exc


# --- Helpers ------------------------------------------------------------------


def _timestamp_to_raw(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


# RFC 3339 as written by other services: "Z" for UTC and up to nanosecond
# fractions, neither of which datetime.fromisoformat accepts on every Python.
_RFC3339 = re.compile(
    r"^(?P<base>[^.]+?)(?:\.(?P<fraction>\d+))?(?P<offset>[Zz]|[+-]\d{2}:\d{2})?$"
)


def _timestamp_from_raw(value: Any) -> datetime | None:
    if value is None:
        return None
    match = _RFC3339.match(value)
    if match is None:
        raise ValueError(f"invalid timestamp {value!r}")

    text = match["base"]
    if match["fraction"]:
        # fromisoformat takes exactly 3 or 6 digits; finer precision is dropped
        text += "." + match["fraction"][:6].ljust(6, "0")
    offset = match["offset"]
    if offset:
        text += "+00:00" if offset in ("Z", "z") else offset
    return datetime.fromisoformat(text)
