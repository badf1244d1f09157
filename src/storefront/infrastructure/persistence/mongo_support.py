"""Helpers shared by the MongoDB repositories."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from bson import Decimal128, ObjectId
from pymongo.errors import PyMongoError

from storefront.domain.exceptions import StorageError

TRANSIENT_TRANSACTION_ERROR = "TransientTransactionError"


@contextmanager
def storage_errors(action: str) -> Iterator[None]:
    """Re-raise any PyMongoError inside the block as StorageError."""
    try:
        yield
    except PyMongoError as exc:
        raise StorageError(
            f"Failed to {action}: {exc}",
            transient=exc.has_error_label(TRANSIENT_TRANSACTION_ERROR),
        ) from exc


def to_decimal(value: Any) -> Decimal:
    # Older documents stored amounts as plain numbers.
    if isinstance(value, Decimal128):
        return value.to_decimal()
    return Decimal(str(value))


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes coming back from the driver as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_ref(value: str) -> ObjectId | str:
    """Store ids of other documents as ObjectId references when they are one."""
    if ObjectId.is_valid(value):
        return ObjectId(value)
    return value
