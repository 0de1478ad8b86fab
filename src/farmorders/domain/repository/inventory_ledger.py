"""Abstract Inventory Ledger for ListedItem stock.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations (SQL, in-memory) live in
the infrastructure layer and the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from farmorders.domain.model.listed_item import ListedItem


class InventoryLedger(ABC):

    @abstractmethod
    def get(self, listed_item_id: str) -> ListedItem | None:
        """Return a listed item by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[ListedItem]:
        """Return every listed item."""

    @abstractmethod
    def save(self, item: ListedItem) -> None:
        """Persist a new or edited listing (seller edits, seeding)."""

    @abstractmethod
    def reserve_stock(self, listed_item_id: str, quantity: int) -> None:
        """Atomically check and decrement on-hand stock.

        Must be a single check-and-decrement: two callers racing for the
        last unit can never both succeed.  Mutates nothing on failure.

        Raises:
            EntityNotFoundError: the listed item does not exist.
            ItemNotAvailableError: the listing is not sellable.
            InsufficientStockError: *quantity* exceeds what is on hand.
        """

    @abstractmethod
    def restore_stock(self, listed_item_id: str, quantity: int) -> None:
        """Unconditionally add *quantity* back to on-hand stock.

        The ledger does not guard against double restores; callers go
        through the reservation's ``released`` flag for that.
        """
