"""Unit tests for the JSON wire format."""

import json
from datetime import datetime, timedelta, timezone
from uuid import UUID

import pytest

from orderstore.domain.model.order import LineItem, Order
from orderstore.infrastructure.persistence.serializer import (
    OrderCodecError,
    decode_order,
    encode_order,
    to_raw,
)
from tests.fakes import CUSTOMER_A, ITEM_B, ITEM_C, make_order


class TestWireFormat:

    def test_field_names(self):
        raw = to_raw(make_order(with_timestamps=True))
        assert raw == {
            "order_id": 1,
            "cust_id": str(CUSTOMER_A),
            "line_items": [{"item_id": str(ITEM_B), "quantity": 2, "price": 500}],
            "created_at": "2024-03-01T12:30:00+00:00",
            "shipped_at": None,
            "completed_at": None,
        }

    def test_encodes_to_json_bytes(self):
        data = encode_order(make_order())
        assert isinstance(data, bytes)
        assert json.loads(data)["order_id"] == 1


class TestRoundTrip:

    def test_nested_items_and_null_timestamps(self):
        order = Order(
            order_id=2**64 - 1,
            customer_id=CUSTOMER_A,
            line_items=[
                LineItem(item_id=ITEM_B, quantity=2, price=500),
                LineItem(item_id=ITEM_C, quantity=0, price=0),
            ],
        )
        assert decode_order(encode_order(order)) == order

    def test_all_timestamps_set(self):
        tz = timezone(timedelta(hours=-5))
        order = Order(
            order_id=9,
            customer_id=CUSTOMER_A,
            created_at=datetime(2024, 1, 1, 8, 0, tzinfo=tz),
            shipped_at=datetime(2024, 1, 2, 9, 15, 30, 123456, tzinfo=tz),
            completed_at=datetime(2024, 1, 3, 10, 0, tzinfo=timezone.utc),
        )
        assert decode_order(encode_order(order)) == order

    def test_item_order_preserved(self):
        order = Order(
            order_id=3,
            customer_id=CUSTOMER_A,
            line_items=[
                LineItem(item_id=ITEM_C, quantity=1, price=1),
                LineItem(item_id=ITEM_B, quantity=1, price=1),
            ],
        )
        decoded = decode_order(encode_order(order))
        assert [i.item_id for i in decoded.line_items] == [ITEM_C, ITEM_B]

    def test_decodes_str_input(self):
        order = make_order()
        assert decode_order(encode_order(order).decode("utf-8")) == order


class TestDecodeFailures:

    def test_invalid_json(self):
        with pytest.raises(OrderCodecError, match="cannot decode"):
            decode_order(b"{not json")

    def test_not_an_object(self):
        with pytest.raises(OrderCodecError, match="JSON object"):
            decode_order(b"[1, 2, 3]")

    def test_missing_field(self):
        with pytest.raises(OrderCodecError):
            decode_order(b'{"order_id": 1, "line_items": []}')

    def test_bad_uuid(self):
        raw = to_raw(make_order())
        raw["cust_id"] = "not-a-uuid"
        with pytest.raises(OrderCodecError):
            decode_order(json.dumps(raw))

    def test_out_of_range_quantity(self):
        raw = to_raw(make_order())
        raw["line_items"][0]["quantity"] = -3
        with pytest.raises(OrderCodecError):
            decode_order(json.dumps(raw))

    def test_null_line_items_decode_as_empty(self):
        raw = to_raw(make_order())
        raw["line_items"] = None
        assert decode_order(json.dumps(raw)).line_items == []


class TestEncodeFailures:

    def test_non_datetime_timestamp(self):
        order = make_order()
        order.created_at = "yesterday"
        with pytest.raises(OrderCodecError, match="cannot encode"):
            encode_order(order)

    def test_customer_id_kept_as_opaque_string(self):
        order = Order(order_id=1, customer_id=UUID(int=0))
        assert to_raw(order)["cust_id"] == "00000000-0000-0000-0000-000000000000"


class TestForeignTimestamps:

    def _decode_with(self, created_at: str):
        raw = to_raw(make_order())
        raw["created_at"] = created_at
        return decode_order(json.dumps(raw)).created_at

    def test_zulu_suffix(self):
        assert self._decode_with("2024-03-01T12:30:00Z") == datetime(
            2024, 3, 1, 12, 30, tzinfo=timezone.utc
        )

    def test_nanosecond_fraction_truncated(self):
        ts = self._decode_with("2024-03-01T12:30:00.123456789Z")
        assert ts.microsecond == 123456
        assert ts.utcoffset() == timedelta(0)

    def test_short_fraction_padded(self):
        assert self._decode_with("2024-03-01T12:30:00.5-05:00").microsecond == 500000

    def test_numeric_offset_kept(self):
        ts = self._decode_with("2024-03-01T12:30:00+05:30")
        assert ts.utcoffset() == timedelta(hours=5, minutes=30)

    def test_garbage_rejected(self):
        with pytest.raises(OrderCodecError):
            self._decode_with("yesterday at noon")
