"""Membership index abstraction.

The index lists the store key of every persisted order so that orders
can be enumerated.  Additions and removals are *queued* on the caller's
transaction rather than executed directly, so they commit or discard
together with the primary record write.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class OrderIndex(ABC):

    @abstractmethod
    def queue_add(self, pipe: Any, key: str) -> None:
        """Queue the addition of *key* on the transaction *pipe*."""

    @abstractmethod
    def queue_remove(self, pipe: Any, key: str) -> None:
        """Queue the removal of *key* on the transaction *pipe*."""

    @abstractmethod
    def contains(self, key: str) -> bool:
        """Return True if *key* is currently indexed."""

    @abstractmethod
    def scan(self, cursor: str, size: int) -> tuple[list[str], str | None]:
        """Return up to *size* keys from *cursor* and the next cursor.

        The next cursor is None when the scan is complete.
        """
