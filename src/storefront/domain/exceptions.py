"""Domain-level exceptions.

Every failure the core can report is a subclass of DomainException and
carries an ``ErrorKind``.  The kind is a plain enumeration; translating it
into a wire-level status belongs to whatever boundary layer sits on top.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    BAD_REQUEST = "BadRequest"
    NOT_FOUND = "NotFound"
    INSUFFICIENT_STOCK = "InsufficientStock"
    INTERNAL_FAILURE = "InternalFailure"


class DomainException(Exception):
    """Base class for all domain errors."""

    kind: ErrorKind = ErrorKind.INTERNAL_FAILURE


class ValidationError(DomainException):
    """Malformed or empty input; raised before the store is touched."""

    kind = ErrorKind.BAD_REQUEST


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    kind = ErrorKind.NOT_FOUND


class InsufficientStockError(DomainException):
    """Requested quantity exceeds the stock available at check time."""

    kind = ErrorKind.INSUFFICIENT_STOCK

    def __init__(self, product_name: str) -> None:
        super().__init__(f"Insufficient stock for {product_name}")
        self.product_name = product_name


class InfrastructureError(DomainException):
    """A backend failed for reasons not attributable to the caller."""

    kind = ErrorKind.INTERNAL_FAILURE


class StorageError(InfrastructureError):
    """The primary store rejected or failed an operation.

    ``transient`` marks failures the store expects to clear on a fresh
    attempt, such as a write conflict between two transactions.
    """

    def __init__(self, message: str, transient: bool = False) -> None:
        super().__init__(message)
        self.transient = transient


class CacheError(InfrastructureError):
    """The cache backend is unreachable or misbehaving."""
