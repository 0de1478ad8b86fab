"""SQLAlchemy-backed implementation of InventoryLedger.

``reserve_stock`` is one conditional UPDATE: the availability check and
the decrement happen in the same statement, so two transactions racing
for the last unit serialize on the row and the loser matches zero rows.
"""

from __future__ import annotations

import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from farmorders.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ItemNotAvailableError,
    ValidationError,
)
from farmorders.domain.model.listed_item import ListedItem, ListingStatus
from farmorders.domain.model.value_objects import Money
from farmorders.domain.repository.inventory_ledger import InventoryLedger
from farmorders.infrastructure.persistence.orm import ListedItemRow

logger = logging.getLogger(__name__)


class SqlAlchemyInventoryLedger(InventoryLedger):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- InventoryLedger interface --------------------------------------------

    def get(self, listed_item_id: str) -> ListedItem | None:
        row = self._session.get(ListedItemRow, listed_item_id, populate_existing=True)
        return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[ListedItem]:
        rows = self._session.scalars(select(ListedItemRow).order_by(ListedItemRow.id))
        return [self._to_domain(row) for row in rows]

    def save(self, item: ListedItem) -> None:
        self._session.merge(self._to_row(item))
        self._session.flush()

    def reserve_stock(self, listed_item_id: str, quantity: int) -> None:
        if quantity <= 0:
            raise ValidationError("Reservation quantity must be positive")

        result = self._session.execute(
            update(ListedItemRow)
            .where(
                ListedItemRow.id == listed_item_id,
                ListedItemRow.status == ListingStatus.AVAILABLE.value,
                ListedItemRow.quantity_available >= quantity,
            )
            .values(quantity_available=ListedItemRow.quantity_available - quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 1:
            return

        # Nothing matched: read the row only to name the failure.
        row = self._session.get(ListedItemRow, listed_item_id, populate_existing=True)
        if row is None:
            raise EntityNotFoundError(f"Listed item '{listed_item_id}' not found")
        if row.status != ListingStatus.AVAILABLE.value:
            raise ItemNotAvailableError(f"Listed item '{listed_item_id}' is not available")
        logger.info(
            "stock reservation rejected",
            extra={
                "listed_item_id": listed_item_id,
                "requested": quantity,
                "available": row.quantity_available,
            },
        )
        raise InsufficientStockError(
            f"Insufficient stock for {row.name} "
            f"(need {quantity}, have {row.quantity_available} available)"
        )

    def restore_stock(self, listed_item_id: str, quantity: int) -> None:
        if quantity <= 0:
            raise ValidationError("Restore quantity must be positive")

        result = self._session.execute(
            update(ListedItemRow)
            .where(ListedItemRow.id == listed_item_id)
            .values(quantity_available=ListedItemRow.quantity_available + quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise EntityNotFoundError(f"Listed item '{listed_item_id}' not found")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_row(item: ListedItem) -> ListedItemRow:
        return ListedItemRow(
            id=item.id,
            seller_id=item.seller_id,
            name=item.name,
            unit_price=item.unit_price.amount,
            currency=item.unit_price.currency,
            unit=item.unit,
            quantity_available=item.quantity_available,
            status=item.status.value,
        )

    @staticmethod
    def _to_domain(row: ListedItemRow) -> ListedItem:
        return ListedItem(
            id=row.id,
            seller_id=row.seller_id,
            name=row.name,
            unit_price=Money.of(row.unit_price, row.currency),
            unit=row.unit,
            quantity_available=row.quantity_available,
            status=ListingStatus(row.status),
        )
