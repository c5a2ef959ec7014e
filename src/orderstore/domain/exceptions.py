"""Domain-level exceptions.

All failures are expressed as subclasses of DomainException so callers
(the CLI, an HTTP layer) can catch them uniformly.  Repository failures
additionally carry the name of the operation that failed.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A field value is outside the range the model accepts."""


class RepositoryError(DomainException):
    """Base class for failures raised by an OrderRepository.

    ``operation`` names the repository operation (``insert``,
    ``find_by_id``, ...) so the failure can be traced without a stack.
    """

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation}: {message}")
        self.operation = operation


class NotExistError(RepositoryError):
    """The operation targets an order ID that is not stored."""


class AlreadyExistsError(RepositoryError):
    """Insert targets an order ID that is already stored."""


class EncodeError(RepositoryError):
    """An outgoing order could not be serialized."""


class DecodeError(RepositoryError):
    """A stored value could not be deserialized into an order."""


class TransportError(RepositoryError):
    """The store or its connection failed (including timeouts)."""
