"""Unit tests for the InventoryReservationService domain service."""

import pytest

from farmorders.domain.exceptions import EntityNotFoundError, InsufficientStockError
from farmorders.domain.model.listed_item import ListedItem
from farmorders.domain.model.order import OrderLineItem
from farmorders.domain.model.value_objects import Money, Quantity
from farmorders.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)
from tests.fakes import FakeInventoryLedger


def _lines(*specs: tuple[str, int]) -> list[OrderLineItem]:
    """Create line items from (listed_item_id, qty) tuples."""
    return [
        OrderLineItem(
            listed_item_id=item_id,
            item_name=f"Item {item_id}",
            quantity=Quantity(qty),
            unit_price=Money.of("10.00"),
        )
        for item_id, qty in specs
    ]


def _ledger(*specs: tuple[str, int]) -> FakeInventoryLedger:
    """Create ledger with (listed_item_id, on_hand) tuples."""
    return FakeInventoryLedger([
        ListedItem(
            id=item_id,
            seller_id="farmer-a",
            name=f"Item {item_id}",
            unit_price=Money.of("10.00"),
            quantity_available=on_hand,
        )
        for item_id, on_hand in specs
    ])


class TestReserveLines:

    def test_reserves_all_lines(self):
        ledger = _ledger(("1", 100), ("2", 50))
        svc = InventoryReservationService(ledger)

        svc.reserve_lines(_lines(("1", 10), ("2", 5)))

        assert ledger.available("1") == 90
        assert ledger.available("2") == 45

    def test_locks_rows_in_id_order(self):
        ledger = _ledger(("a", 5), ("b", 5), ("c", 5))
        svc = InventoryReservationService(ledger)

        svc.reserve_lines(_lines(("c", 1), ("a", 1), ("b", 1)))

        assert ledger.reserve_calls == ["a", "b", "c"]

    def test_insufficient_stock_propagates(self):
        ledger = _ledger(("1", 5))
        svc = InventoryReservationService(ledger)

        with pytest.raises(InsufficientStockError, match="Insufficient stock for Item 1"):
            svc.reserve_lines(_lines(("1", 10)))
        assert ledger.available("1") == 5

    def test_unknown_item(self):
        svc = InventoryReservationService(_ledger())
        with pytest.raises(EntityNotFoundError):
            svc.reserve_lines(_lines(("404", 1)))


class TestRestoreLines:

    def test_restores_exact_quantities(self):
        ledger = _ledger(("1", 0), ("2", 7))
        svc = InventoryReservationService(ledger)

        svc.restore_lines(_lines(("1", 5), ("2", 3)))

        assert ledger.available("1") == 5
        assert ledger.available("2") == 10
