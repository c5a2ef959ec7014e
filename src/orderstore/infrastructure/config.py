"""Application configuration.

Values come from ``ORDERSTORE_*`` environment variables, optionally read
from a ``.env`` file.  :func:`get_settings` caches the result.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from orderstore.infrastructure.persistence.keys import (
    DEFAULT_INDEX_KEY,
    DEFAULT_KEY_PREFIX,
)


class IndexBackend(str, Enum):
    """Structure used for the membership index.

    ``SET`` pages in hash order with SSCAN; ``SORTED_SET`` pages in key
    order with ZRANGEBYLEX.
    """

    SET = "set"
    SORTED_SET = "sorted_set"


class Settings(BaseSettings):
    """Repository settings read from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="ORDERSTORE_", env_file=".env", extra="ignore"
    )

    redis_url: str = "redis://localhost:6379/0"
    # Deadlines for every store call, in seconds
    socket_timeout: float | None = 5.0
    socket_connect_timeout: float | None = 5.0
    key_prefix: str = DEFAULT_KEY_PREFIX
    index_key: str = DEFAULT_INDEX_KEY
    index_backend: IndexBackend = IndexBackend.SET
    default_page_size: int = Field(default=10, gt=0)
    log_level: str = "WARNING"


@lru_cache
def get_settings() -> Settings:
    return Settings()
