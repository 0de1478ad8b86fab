"""Application service: Set Listing use case (seller edit)."""

from __future__ import annotations

from farmorders.domain.exceptions import EntityNotFoundError, ForbiddenError
from farmorders.domain.model.listed_item import ListingStatus
from farmorders.domain.repository.unit_of_work import UnitOfWork


class SetListingHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        listed_item_id: str,
        seller_id: str,
        quantity: int | None = None,
        available: bool | None = None,
    ) -> None:
        """Overwrite stock level and/or sellability of one of the seller's listings."""
        with self._uow as uow:
            item = uow.ledger.get(listed_item_id)
            if item is None:
                raise EntityNotFoundError(f"Listed item '{listed_item_id}' not found")
            if item.seller_id != seller_id:
                raise ForbiddenError(f"Listed item '{listed_item_id}' is not yours")

            if quantity is not None:
                item.set_stock(quantity)
            if available is not None:
                item.status = ListingStatus.AVAILABLE if available else ListingStatus.UNAVAILABLE
            uow.ledger.save(item)
            uow.commit()
