"""Abstract repository for the Order entity.

Implementations must keep the primary records and the membership index
in agreement: a completed operation never leaves one without the other.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from orderstore.domain.exceptions import ValidationError
from orderstore.domain.model.order import Order

# Cursor that requests the first page.  Exhaustion is reported with None,
# never with this value.
START_CURSOR = "0"


@dataclass(frozen=True)
class FindAllPage:
    """Input: how many orders to return and where to resume."""

    size: int
    cursor: str = START_CURSOR

    def __post_init__(self) -> None:
        if not isinstance(self.size, int) or self.size <= 0:
            raise ValidationError(f"Page size must be a positive integer, got {self.size!r}")
        if not isinstance(self.cursor, str) or not self.cursor:
            raise ValidationError(f"Invalid cursor: {self.cursor!r}")


@dataclass(frozen=True)
class FindResult:
    """Output: one page of orders plus the cursor for the next page.

    ``next_cursor`` is None once the index has been fully scanned.
    """

    orders: list[Order] = field(default_factory=list)
    next_cursor: str | None = None

    @property
    def exhausted(self) -> bool:
        return self.next_cursor is None


class OrderRepository(ABC):
    """Store of orders keyed by ID.

    Store failures are reported as RepositoryError subclasses naming the
    failing operation.  Caller input that can never be valid (an ID outside
    the 64-bit unsigned range, a malformed cursor) raises ValidationError
    before any store call is made.
    """

    @abstractmethod
    def insert(self, order: Order) -> None:
        """Store a new order; AlreadyExistsError if its ID is taken."""

    @abstractmethod
    def find_by_id(self, order_id: int) -> Order:
        """Return the stored order; NotExistError if absent."""

    @abstractmethod
    def update(self, order: Order) -> None:
        """Overwrite an existing order; NotExistError if absent."""

    @abstractmethod
    def delete_by_id(self, order_id: int) -> None:
        """Remove an order and its index entry; NotExistError if absent."""

    @abstractmethod
    def find_all(self, page: FindAllPage) -> FindResult:
        """Return one page of stored orders in index scan order.

        ValidationError if the cursor was not produced by this index.
        """
