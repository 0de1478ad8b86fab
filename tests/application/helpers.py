"""Shared builders for application-layer tests."""

from __future__ import annotations

from farmorders.application.dto import OrderItemSpec, PlaceOrderRequest
from farmorders.domain.model.listed_item import ListedItem
from farmorders.domain.model.value_objects import Money

BUYER_ID = "buyer-1"
SELLER_ID = "farmer-a"


def listings() -> list[ListedItem]:
    """Tomatoes and kale from farmer-a, maize from farmer-b; 10 of each."""
    return [
        ListedItem(id="1", seller_id=SELLER_ID, name="Tomatoes", unit_price=Money.of("120"), quantity_available=10),
        ListedItem(id="2", seller_id=SELLER_ID, name="Kale", unit_price=Money.of("80"), quantity_available=10),
        ListedItem(id="3", seller_id="farmer-b", name="Maize", unit_price=Money.of("60"), quantity_available=10),
    ]


def request(*lines: tuple[str, int, str], address: str = "Kiambu Rd 4") -> PlaceOrderRequest:
    """Build a request from (listed_item_id, qty, unit_price) tuples."""
    return PlaceOrderRequest(
        items=[OrderItemSpec(item_id, qty, price) for item_id, qty, price in lines],
        delivery_address=address,
    )
