"""Domain service: Order Intake Validator.

Checks a purchase request against the catalog and the marketplace rules
before anything is mutated:

- at least one line, each with an item id, a quantity and a unit price
- every line resolves to the same seller (one order, one farmer)
- the buyer is not that seller under another hat

Prices are always re-read from the catalog.  The client's unit price is
required (it is what the buyer saw) but never trusted for the total.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from farmorders.domain.exceptions import (
    EntityNotFoundError,
    MultiSellerOrderError,
    SelfPurchaseError,
    ValidationError,
)
from farmorders.domain.model.order import MAX_LINE_ITEMS, OrderLineItem
from farmorders.domain.model.principal import Principal
from farmorders.domain.model.value_objects import Money, Quantity
from farmorders.domain.repository.inventory_ledger import InventoryLedger

logger = logging.getLogger(__name__)


class RequestedLine(Protocol):
    listed_item_id: str | None
    quantity: int | None
    unit_price: str | None


@dataclass(frozen=True)
class ValidatedOrder:
    seller_id: str
    items: tuple[OrderLineItem, ...]

    @property
    def total(self) -> Money:
        result = Money.zero(self.items[0].unit_price.currency)
        for item in self.items:
            result = result + item.subtotal
        return result


class OrderIntakeValidator:

    def __init__(self, ledger: InventoryLedger) -> None:
        self._ledger = ledger

    def validate(
        self, principal: Principal, requested: Sequence[RequestedLine]
    ) -> ValidatedOrder:
        if not requested:
            raise ValidationError("Order must contain at least one item")
        if len(requested) > MAX_LINE_ITEMS:
            raise ValidationError(f"Maximum {MAX_LINE_ITEMS} items per order")

        lines: list[OrderLineItem] = []
        sellers: set[str] = set()
        seen: set[str] = set()

        for line in requested:
            if not line.listed_item_id or line.quantity is None or line.unit_price is None:
                raise ValidationError(
                    "Each item must have listed_item_id, quantity, and unit_price"
                )
            if line.listed_item_id in seen:
                raise ValidationError(
                    f"Listed item '{line.listed_item_id}' appears more than once"
                )
            seen.add(line.listed_item_id)

            quantity = Quantity(line.quantity)
            client_price = Money.of(line.unit_price)

            item = self._ledger.get(line.listed_item_id)
            if item is None:
                raise EntityNotFoundError(
                    f"Listed item '{line.listed_item_id}' not found"
                )
            sellers.add(item.seller_id)

            if not client_price.same_value(item.unit_price):
                logger.warning(
                    "client price differs from catalog, using catalog price",
                    extra={
                        "listed_item_id": item.id,
                        "client_price": str(client_price),
                        "catalog_price": str(item.unit_price),
                    },
                )

            lines.append(
                OrderLineItem(
                    listed_item_id=item.id,
                    item_name=item.name,
                    quantity=quantity,
                    unit_price=item.unit_price,  # <-- price snapshot
                )
            )

        if len(sellers) != 1:
            raise MultiSellerOrderError(
                "multi-seller order: all items must come from one seller, "
                "place a separate order per seller"
            )
        seller_id = next(iter(sellers))

        if principal.is_seller(seller_id):
            raise SelfPurchaseError("self-purchase: sellers cannot buy their own listings")

        return ValidatedOrder(seller_id=seller_id, items=tuple(lines))
