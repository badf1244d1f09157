"""Value objects for prices and ordered quantities.

Both are frozen and compared by value.  Construction validates, so a
``Money`` or ``Quantity`` that exists is always usable in a total.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from functools import total_ordering

from storefront.domain.exceptions import ValidationError

DEFAULT_CURRENCY = "USD"

AmountLike = str | int | float | Decimal


@total_ordering
@dataclass(frozen=True)
class Money:
    """A non-negative price or order total.

    Amounts are Decimals; catalog prices multiplied by quantities and
    summed over an order never pick up binary rounding noise.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        amount = self.amount
        if not isinstance(amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(amount).__name__}"
            )
        if not amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {amount}")
        if amount.is_signed() and amount != 0:
            raise ValidationError(f"Money amount cannot be negative, got {amount}")

    @classmethod
    def of(cls, amount: AmountLike, currency: str = DEFAULT_CURRENCY) -> Money:
        """Build from user or catalog input such as ``"1200"`` or ``75``."""
        if isinstance(amount, bool):
            raise ValidationError(f"Invalid money amount: {amount!r}")
        try:
            value = Decimal(str(amount).strip())
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        return cls(value, currency)

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> Money:
        return cls(Decimal(0), currency)

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + self._same_currency(other).amount, self.currency)

    def __mul__(self, quantity: int) -> Money:
        # Only whole units are ever ordered.
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise TypeError(f"Money can only be multiplied by an int, not {type(quantity).__name__}")
        return Money(self.amount * quantity, self.currency)

    __rmul__ = __mul__

    def __lt__(self, other: Money) -> bool:
        return self.amount < self._same_currency(other).amount

    def __str__(self) -> str:
        return "$" + self.to_plain()

    def to_plain(self) -> str:
        """Two-decimal amount without a symbol, e.g. ``"1200.00"``."""
        return f"{self.amount:.2f}"

    def _same_currency(self, other: Money) -> Money:
        if other.currency != self.currency:
            raise ValidationError(f"Cannot combine {self.currency} with {other.currency}")
        return other


@dataclass(frozen=True)
class Quantity:
    """How many units of one product a line item asks for (at least one)."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value < 1:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)
