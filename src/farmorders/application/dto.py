"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from farmorders.domain.model.order import DEFAULT_PAYMENT_METHOD, Order
from farmorders.domain.model.reservation import Reservation


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: one requested line (listed item id, quantity, price the buyer saw)."""

    listed_item_id: str | None
    quantity: int | None
    unit_price: str | None


@dataclass(frozen=True)
class PlaceOrderRequest:
    """Input: a complete create-order request."""

    items: list[OrderItemSpec]
    delivery_address: str
    delivery_date: date | None = None
    payment_method: str = DEFAULT_PAYMENT_METHOD
    notes: str | None = None


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single line item as displayed to the user."""

    listed_item_id: str
    item_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "KES 120.00"
    subtotal: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    buyer_id: str
    seller_id: str
    status: str
    payment_status: str
    items: list[OrderLineItemDTO]
    total: str
    delivery_address: str
    delivery_date: str | None
    payment_method: str
    notes: str | None
    created_at: str
    reservation_expires_at: str | None = None


@dataclass
class SweepReport:
    """Output: what one expiry sweep pass did."""

    expired: list[int] = field(default_factory=list)
    failed: list[int] = field(default_factory=list)


def _format_time(value) -> str:
    return value.strftime("%Y-%m-%d %H:%M UTC")


def to_order_dto(order: Order, reservation: Reservation | None = None) -> OrderDTO:
    delivery = order.delivery
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        buyer_id=order.buyer_id,
        seller_id=order.seller_id,
        status=order.status.value,
        payment_status=order.payment_status.value,
        items=[
            OrderLineItemDTO(
                listed_item_id=item.listed_item_id,
                item_name=item.item_name,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                subtotal=str(item.subtotal),
            )
            for item in order.items
        ],
        total=str(order.total),
        delivery_address=delivery.address,
        delivery_date=delivery.delivery_date.isoformat() if delivery.delivery_date else None,
        payment_method=delivery.payment_method,
        notes=delivery.notes,
        created_at=_format_time(order.created_at),
        reservation_expires_at=(
            _format_time(reservation.expires_at)
            if reservation is not None and not reservation.released
            else None
        ),
    )
