"""Abstract unit of work.

Every store call made while placing an order receives the same
UnitOfWork, so the stock decrements and the order insert become
visible together or not at all.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable


class UnitOfWork(ABC):
    """Scoped group of storage operations that commits or aborts as one.

    Used as a context manager, entering begins the unit of work and
    leaving without an explicit ``commit()`` aborts it.
    """

    @abstractmethod
    def begin(self) -> None:
        """Start the unit of work."""

    @abstractmethod
    def commit(self) -> None:
        """Make every write performed in this unit of work visible."""

    @abstractmethod
    def abort(self) -> None:
        """Discard every write performed in this unit of work.

        Must be safe to call after ``commit()`` or a previous ``abort()``.
        """

    def __enter__(self) -> UnitOfWork:
        self.begin()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.abort()


UnitOfWorkFactory = Callable[[], UnitOfWork]
