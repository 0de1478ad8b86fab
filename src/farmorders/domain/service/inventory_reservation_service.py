"""Domain service: Inventory Reservation.

This service coordinates the cross-aggregate operation of taking stock
out of the ledger for an order's line items, or putting it back.

It does no rollback of its own.  Callers run it inside a unit of work, so
a failure on the third line undoes the decrements of the first two when
the transaction is abandoned.
"""

from __future__ import annotations

from collections.abc import Iterable

from farmorders.domain.model.order import OrderLineItem
from farmorders.domain.repository.inventory_ledger import InventoryLedger


class InventoryReservationService:

    def __init__(self, ledger: InventoryLedger) -> None:
        self._ledger = ledger

    def reserve_lines(self, lines: Iterable[OrderLineItem]) -> None:
        """Decrement stock for every line, all or nothing.

        Lines are processed in listed-item id order so that two orders
        touching the same items lock the rows in the same sequence.
        """
        for line in sorted(lines, key=lambda line: line.listed_item_id):
            self._ledger.reserve_stock(line.listed_item_id, line.quantity.value)

    def restore_lines(self, lines: Iterable[OrderLineItem]) -> None:
        """Give back exactly the quantity each line took."""
        for line in sorted(lines, key=lambda line: line.listed_item_id):
            self._ledger.restore_stock(line.listed_item_id, line.quantity.value)
