"""Redis-backed implementations of OrderIndex."""

from __future__ import annotations

from typing import Any

from orderstore.domain.exceptions import ValidationError
from orderstore.domain.repository.order_index import OrderIndex
from orderstore.domain.repository.order_repository import START_CURSOR
from orderstore.infrastructure.persistence.keys import DEFAULT_INDEX_KEY


def _to_str(key: bytes | str) -> str:
    return key.decode("utf-8") if isinstance(key, bytes) else key


class RedisSetIndex(OrderIndex):
    """Membership index kept in a plain Redis set and walked with SSCAN.

    Members come back in hash order.  SSCAN treats COUNT as a hint and may
    return more members than asked for, so the page cursor is
    ``"<sscan cursor>:<offset>"``: the offset skips the members of that
    SSCAN batch already handed out on earlier pages.
    """

    def __init__(self, client: Any, index_key: str = DEFAULT_INDEX_KEY) -> None:
        self._client = client
        self._index_key = index_key

    def queue_add(self, pipe: Any, key: str) -> None:
        pipe.sadd(self._index_key, key)

    def queue_remove(self, pipe: Any, key: str) -> None:
        pipe.srem(self._index_key, key)

    def contains(self, key: str) -> bool:
        return bool(self._client.sismember(self._index_key, key))

    def scan(self, cursor: str, size: int) -> tuple[list[str], str | None]:
        scan_cursor, offset = self._parse_cursor(cursor)
        next_scan_cursor, raw_keys = self._client.sscan(
            self._index_key, cursor=scan_cursor, count=size
        )
        keys = [_to_str(k) for k in raw_keys][offset:]

        if len(keys) > size:
            return keys[:size], f"{scan_cursor}:{offset + size}"
        if int(next_scan_cursor) == 0:
            return keys, None
        return keys, str(next_scan_cursor)

    @staticmethod
    def _parse_cursor(cursor: str) -> tuple[int, int]:
        scan_part, _, offset_part = cursor.partition(":")
        try:
            scan_cursor = int(scan_part)
            offset = int(offset_part) if offset_part else 0
        except ValueError as exc:
            raise ValidationError(f"Invalid cursor: {cursor!r}") from exc
        if scan_cursor < 0 or offset < 0:
            raise ValidationError(f"Invalid cursor: {cursor!r}")
        return scan_cursor, offset


class RedisSortedSetIndex(OrderIndex):
    """Membership index kept in a Redis sorted set, walked with ZRANGEBYLEX.

    Every member has score 0, so members are ordered by key bytes and the
    walk is stable across pages.  The cursor is the last key returned.
    """

    def __init__(self, client: Any, index_key: str = DEFAULT_INDEX_KEY) -> None:
        self._client = client
        self._index_key = index_key

    def queue_add(self, pipe: Any, key: str) -> None:
        pipe.zadd(self._index_key, {key: 0})

    def queue_remove(self, pipe: Any, key: str) -> None:
        pipe.zrem(self._index_key, key)

    def contains(self, key: str) -> bool:
        return self._client.zscore(self._index_key, key) is not None

    def scan(self, cursor: str, size: int) -> tuple[list[str], str | None]:
        low = "-" if cursor == START_CURSOR else f"({cursor}"
        # One extra member tells us whether another page exists
        raw_keys = self._client.zrangebylex(
            self._index_key, low, "+", start=0, num=size + 1
        )
        keys = [_to_str(k) for k in raw_keys]
        if len(keys) > size:
            keys = keys[:size]
            return keys, keys[-1]
        return keys, None
