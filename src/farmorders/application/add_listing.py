"""Application service: Add Listing use case.

Listings belong to the catalog collaborator; this exists so sellers (and
local development) can seed stock into the ledger.
"""

from __future__ import annotations

from farmorders.domain.exceptions import ValidationError
from farmorders.domain.model.listed_item import ListedItem
from farmorders.domain.model.value_objects import Money
from farmorders.domain.repository.unit_of_work import UnitOfWork


class AddListingHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        seller_id: str,
        name: str,
        price: str,
        quantity: int,
        unit: str = "kg",
    ) -> ListedItem:
        """Add a new listing for *seller_id*."""
        if not seller_id or not seller_id.strip():
            raise ValidationError("Seller identity is required")
        if not name or not name.strip():
            raise ValidationError("Listing name is required")

        unit_price = Money.of(price)
        if unit_price.amount <= 0:
            raise ValidationError("Listing price must be greater than zero")

        with self._uow as uow:
            # Auto-assign ID based on existing listings
            numeric_ids = [int(item.id) for item in uow.ledger.list_all() if item.id.isdigit()]
            next_id = str(max(numeric_ids) + 1) if numeric_ids else "1"

            item = ListedItem(
                id=next_id,
                seller_id=seller_id.strip(),
                name=name.strip(),
                unit_price=unit_price,
                unit=unit,
                quantity_available=quantity,
            )
            uow.ledger.save(item)
            uow.commit()
        return item
