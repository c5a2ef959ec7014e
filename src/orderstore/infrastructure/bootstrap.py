"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from typing import Any

import redis
from redis.backoff import NoBackoff
from redis.retry import Retry

from orderstore.domain.repository.order_index import OrderIndex
from orderstore.infrastructure.config import IndexBackend, Settings, get_settings
from orderstore.infrastructure.persistence.redis_order_index import (
    RedisSetIndex,
    RedisSortedSetIndex,
)
from orderstore.infrastructure.persistence.redis_order_repository import (
    RedisOrderRepository,
)


def redis_client(settings: Settings | None = None) -> redis.Redis:
    settings = settings or get_settings()
    return redis.Redis.from_url(
        settings.redis_url,
        socket_timeout=settings.socket_timeout,
        socket_connect_timeout=settings.socket_connect_timeout,
        # Failures surface to the caller; nothing is retried underneath
        retry=Retry(NoBackoff(), 0),
    )


def order_index(client: Any, settings: Settings | None = None) -> OrderIndex:
    settings = settings or get_settings()
    if settings.index_backend is IndexBackend.SORTED_SET:
        return RedisSortedSetIndex(client, settings.index_key)
    return RedisSetIndex(client, settings.index_key)


def order_repository(
    settings: Settings | None = None,
    client: Any = None,
) -> RedisOrderRepository:
    settings = settings or get_settings()
    if client is None:
        client = redis_client(settings)
    return RedisOrderRepository(
        client,
        order_index(client, settings),
        key_prefix=settings.key_prefix,
    )
