"""Product aggregate.

Products live independently of orders. Catalog management creates,
edits and removes them; order placement only ever lowers ``stock``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


class Category(Enum):
    OFFICE = "office"
    KITCHEN = "kitchen"
    BEDROOM = "bedroom"
    ELECTRONICS = "Electronics"


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 100
DESCRIPTION_MIN_LENGTH = 10
DESCRIPTION_MAX_LENGTH = 1000

EDITABLE_FIELDS = frozenset({"name", "price", "description", "category", "stock"})


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Product:
    """A product in the catalog.

    Use ``Product.create()`` for new products; ``__init__`` stays
    permissive so repositories can reconstitute stored documents.
    """

    id: str | None
    name: str
    price: Money
    description: str
    category: Category
    stock: int
    owner_id: str
    updated_by: str
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(
        owner_id: str,
        name: str,
        price: Money,
        description: str,
        category: str | Category,
        stock: int = 0,
    ) -> Product:
        """Create a new product, enforcing all invariants."""
        if not owner_id:
            raise ValidationError("Product owner is required")

        now = _utcnow()
        return Product(
            id=None,
            name=_validate_name(name),
            price=price,
            description=_validate_description(description),
            category=_parse_category(category),
            stock=_validate_stock(stock),
            owner_id=owner_id,
            updated_by=owner_id,
            created_at=now,
            updated_at=now,
        )

    # --- Mutations ------------------------------------------------------------

    def apply_changes(self, changes: dict[str, Any], updated_by: str) -> None:
        """Apply a partial update from catalog management.

        All values are validated before anything is assigned, so a bad
        field leaves the product untouched.
        """
        if not updated_by:
            raise ValidationError("Updating user is required")

        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(
                f"Cannot update field(s): {', '.join(sorted(unknown))}"
            )

        validated: dict[str, Any] = {}
        if "name" in changes:
            validated["name"] = _validate_name(changes["name"])
        if "price" in changes:
            price = changes["price"]
            validated["price"] = price if isinstance(price, Money) else Money.of(price)
        if "description" in changes:
            validated["description"] = _validate_description(changes["description"])
        if "category" in changes:
            validated["category"] = _parse_category(changes["category"])
        if "stock" in changes:
            validated["stock"] = _validate_stock(changes["stock"])

        for name, value in validated.items():
            setattr(self, name, value)
        self.updated_by = updated_by
        self.updated_at = _utcnow()

    # --- Queries --------------------------------------------------------------

    def has_stock_for(self, quantity: int) -> bool:
        return self.stock >= quantity


# --- Validation helpers -------------------------------------------------------


def _validate_name(name: Any) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Please provide product name")
    name = name.strip()
    if len(name) < NAME_MIN_LENGTH:
        raise ValidationError(
            f"Name must be at least {NAME_MIN_LENGTH} characters long"
        )
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError(
            f"Name cannot be more than {NAME_MAX_LENGTH} characters"
        )
    return name


def _validate_description(description: Any) -> str:
    if not isinstance(description, str) or not description.strip():
        raise ValidationError("Please provide product description")
    description = description.strip()
    if len(description) < DESCRIPTION_MIN_LENGTH:
        raise ValidationError(
            f"Description must be at least {DESCRIPTION_MIN_LENGTH} characters long"
        )
    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(
            f"Description cannot be more than {DESCRIPTION_MAX_LENGTH} characters"
        )
    return description


def _parse_category(category: Any) -> Category:
    if isinstance(category, Category):
        return category
    try:
        return Category(category)
    except ValueError:
        raise ValidationError(f"{category} is not a supported category") from None


def _validate_stock(stock: Any) -> int:
    if not isinstance(stock, int) or isinstance(stock, bool):
        raise ValidationError(
            f"Stock must be an integer, got {type(stock).__name__}"
        )
    if stock < 0:
        raise ValidationError("Stock cannot be negative")
    return stock
