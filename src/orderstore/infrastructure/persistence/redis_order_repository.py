"""Redis-backed implementation of OrderRepository.

Each order is stored as JSON under ``<prefix>:<id>``; its key is also
listed in a membership index so orders can be paged through.  Insert and
delete WATCH the record key, check it, and then change both structures in
one MULTI/EXEC transaction.  A miss discards the transaction before
anything is queued, so either both changes are applied or neither is.
"""

from __future__ import annotations

import logging
from typing import Any

from redis.exceptions import RedisError, WatchError

from orderstore.domain.exceptions import (
    AlreadyExistsError,
    DecodeError,
    EncodeError,
    NotExistError,
    TransportError,
)
from orderstore.domain.model.order import Order
from orderstore.domain.repository.order_index import OrderIndex
from orderstore.domain.repository.order_repository import (
    FindAllPage,
    FindResult,
    OrderRepository,
)
from orderstore.infrastructure.persistence.keys import DEFAULT_KEY_PREFIX, order_key
from orderstore.infrastructure.persistence.serializer import (
    OrderCodecError,
    decode_order,
    encode_order,
)

logger = logging.getLogger("orderstore.repository")


class RedisOrderRepository(OrderRepository):

    def __init__(
        self,
        client: Any,
        index: OrderIndex,
        key_prefix: str = DEFAULT_KEY_PREFIX,
    ) -> None:
        self._client = client
        self._index = index
        self._key_prefix = key_prefix

    # --- OrderRepository interface --------------------------------------------

    def insert(self, order: Order) -> None:
        data = self._encode("insert", order)
        key = self._key(order.order_id)

        # WATCH makes EXEC fail if another client writes the key after the
        # existence check, so the index is only touched when the record is
        # really created.  Leaving the block discards the watch.
        try:
            with self._client.pipeline(transaction=True) as pipe:
                pipe.watch(key)
                if pipe.exists(key):
                    raise AlreadyExistsError(
                        "insert", f"order {order.order_id} already exists"
                    )
                pipe.multi()
                pipe.set(key, data)
                self._index.queue_add(pipe, key)
                pipe.execute()
        except WatchError as exc:
            # Only a concurrent insert can create a watched, absent key
            raise AlreadyExistsError(
                "insert", f"order {order.order_id} already exists"
            ) from exc
        except RedisError as exc:
            raise self._transport_error("insert", exc) from exc

        logger.debug("Inserted order %s", key)

    def find_by_id(self, order_id: int) -> Order:
        key = self._key(order_id)
        try:
            value = self._client.get(key)
        except RedisError as exc:
            raise self._transport_error("find_by_id", exc) from exc

        if value is None:
            raise NotExistError("find_by_id", f"order {order_id} does not exist")
        return self._decode("find_by_id", value)

    def update(self, order: Order) -> None:
        data = self._encode("update", order)
        key = self._key(order.order_id)

        # SET XX only writes an existing key.  The index is left alone:
        # an existing record is already indexed.
        try:
            updated = self._client.set(key, data, xx=True)
        except RedisError as exc:
            raise self._transport_error("update", exc) from exc

        if not updated:
            raise NotExistError("update", f"order {order.order_id} does not exist")
        logger.debug("Updated order %s", key)

    def delete_by_id(self, order_id: int) -> None:
        key = self._key(order_id)

        # A missing record aborts before anything is queued, so a stale index
        # entry is left as it is.  A concurrent write to the key makes EXEC
        # fail with WatchError, reported as a transport failure.
        try:
            with self._client.pipeline(transaction=True) as pipe:
                pipe.watch(key)
                if not pipe.exists(key):
                    raise NotExistError(
                        "delete_by_id", f"order {order_id} does not exist"
                    )
                pipe.multi()
                pipe.delete(key)
                self._index.queue_remove(pipe, key)
                pipe.execute()
        except RedisError as exc:
            raise self._transport_error("delete_by_id", exc) from exc

        logger.debug("Deleted order %s", key)

    def find_all(self, page: FindAllPage) -> FindResult:
        try:
            keys, next_cursor = self._index.scan(page.cursor, page.size)
        except RedisError as exc:
            raise self._transport_error("find_all", exc) from exc

        if not keys:
            return FindResult(orders=[], next_cursor=next_cursor)

        try:
            values = self._client.mget(keys)
        except RedisError as exc:
            raise self._transport_error("find_all", exc) from exc

        orders: list[Order] = []
        for key, value in zip(keys, values):
            if value is None:
                raise DecodeError("find_all", f"indexed key {key} has no stored order")
            orders.append(self._decode("find_all", value))

        logger.debug("Fetched %d orders, next cursor %r", len(orders), next_cursor)
        return FindResult(orders=orders, next_cursor=next_cursor)

    # --- Helpers --------------------------------------------------------------

    def _key(self, order_id: int) -> str:
        return order_key(order_id, self._key_prefix)

    @staticmethod
    def _encode(operation: str, order: Order) -> bytes:
        try:
            return encode_order(order)
        except OrderCodecError as exc:
            raise EncodeError(operation, str(exc)) from exc

    @staticmethod
    def _decode(operation: str, value: bytes | str) -> Order:
        try:
            return decode_order(value)
        except OrderCodecError as exc:
            raise DecodeError(operation, str(exc)) from exc

    @staticmethod
    def _transport_error(operation: str, exc: RedisError) -> TransportError:
        logger.warning("Redis %s failed: %s", operation, exc)
        return TransportError(operation, f"redis error: {exc}")
