"""Application service: Show Listings use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from farmorders.domain.repository.unit_of_work import UnitOfWork


@dataclass(frozen=True)
class ListingLineDTO:
    listed_item_id: str
    seller_id: str
    name: str
    unit_price: str
    unit: str
    available: int
    status: str


class ShowListingsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[ListingLineDTO]:
        with self._uow as uow:
            items = uow.ledger.list_all()
        return [
            ListingLineDTO(
                listed_item_id=item.id,
                seller_id=item.seller_id,
                name=item.name,
                unit_price=str(item.unit_price),
                unit=item.unit,
                available=item.quantity_available,
                status=item.status.value,
            )
            for item in items
        ]
