"""ListedItem aggregate — a seller's product together with its stock.

Each listed item belongs to exactly one seller and knows how many units
are still on hand.  Orders reference it by id only.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from farmorders.domain.exceptions import (
    InsufficientStockError,
    ItemNotAvailableError,
    ValidationError,
)
from farmorders.domain.model.value_objects import Money


class ListingStatus(Enum):
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


@dataclass
class ListedItem:
    """Aggregate root for a seller's listing.

    Invariants:
    - ``quantity_available`` is always >= 0
    - only AVAILABLE listings can be reserved

    ``reserve()`` and ``restore()`` are the in-process form of the
    inventory ledger operations.  Database-backed ledgers perform the
    same check as a single conditional UPDATE instead.
    """

    id: str
    seller_id: str
    name: str
    unit_price: Money
    unit: str = "kg"
    quantity_available: int = 0
    status: ListingStatus = ListingStatus.AVAILABLE

    def __post_init__(self) -> None:
        if self.quantity_available < 0:
            raise ValidationError(
                f"Quantity available cannot be negative, got {self.quantity_available}"
            )

    @property
    def is_sellable(self) -> bool:
        return self.status == ListingStatus.AVAILABLE

    def reserve(self, quantity: int) -> None:
        """Take *quantity* units out of stock for an order."""
        if quantity <= 0:
            raise ValidationError("Reservation quantity must be positive")
        if not self.is_sellable:
            raise ItemNotAvailableError(f"Listed item '{self.id}' is not available")
        if quantity > self.quantity_available:
            raise InsufficientStockError(
                f"Insufficient stock for {self.name} "
                f"(need {quantity}, have {self.quantity_available} available)"
            )
        self.quantity_available -= quantity

    def restore(self, quantity: int) -> None:
        """Put *quantity* previously reserved units back on hand."""
        if quantity <= 0:
            raise ValidationError("Restore quantity must be positive")
        self.quantity_available += quantity

    def set_stock(self, quantity: int) -> None:
        """Seller edit: overwrite the on-hand count."""
        if quantity < 0:
            raise ValidationError("Stock level cannot be negative")
        self.quantity_available = quantity
