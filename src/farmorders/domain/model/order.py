"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its line items.
All business invariants are enforced here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum

from farmorders.domain.exceptions import InvalidStateError, ValidationError
from farmorders.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class PaymentStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


# Allowed lifecycle moves.  CANCELLED and COMPLETED are terminal.
_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED}),
    OrderStatus.CANCELLED: frozenset(),
    OrderStatus.COMPLETED: frozenset(),
}

DEFAULT_PAYMENT_METHOD = "M-Pesa"
MAX_LINE_ITEMS = 50


@dataclass(frozen=True)
class OrderLineItem:
    """Captures the price snapshot of a listed item at order-creation time.

    Immutable: neither the quantity nor the unit price changes after the
    order is placed, even if the seller later edits the listing.
    """

    listed_item_id: str
    item_name: str
    quantity: Quantity
    unit_price: Money  # locked at order-creation time

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class DeliveryInfo:
    address: str
    delivery_date: date | None = None
    payment_method: str = DEFAULT_PAYMENT_METHOD
    notes: str | None = None

    def __post_init__(self) -> None:
        if not self.address or not self.address.strip():
            raise ValidationError("Delivery address is required")


@dataclass
class Order:
    """Aggregate root for purchase orders.

    Use the ``Order.create()`` factory for new orders — it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    buyer_id: str
    seller_id: str
    items: list[OrderLineItem]
    delivery: DeliveryInfo
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        buyer_id: str,
        seller_id: str,
        items: list[OrderLineItem],
        delivery: DeliveryInfo,
        created_at: datetime | None = None,
    ) -> Order:
        """Create a new pending order, enforcing all invariants."""
        if not buyer_id or not buyer_id.strip():
            raise ValidationError("Buyer identity is required")

        if not items:
            raise ValidationError("Order must contain at least one item")

        if len(items) > MAX_LINE_ITEMS:
            raise ValidationError(f"Maximum {MAX_LINE_ITEMS} items per order")

        return Order(
            id=None,
            buyer_id=buyer_id,
            seller_id=seller_id,
            items=list(items),
            delivery=delivery,
            created_at=created_at or datetime.now(timezone.utc),
        )

    # --- State transitions ----------------------------------------------------

    def confirm(self) -> None:
        """Seller accepts the order: PENDING -> CONFIRMED."""
        self._move_to(OrderStatus.CONFIRMED)

    def complete(self) -> None:
        """Seller hands over the goods: CONFIRMED -> COMPLETED."""
        self._move_to(OrderStatus.COMPLETED)

    def cancel(self) -> None:
        """PENDING|CONFIRMED -> CANCELLED.

        Stock restoration must happen in the same transaction, through
        the restock reconciler, *before* this is persisted.
        """
        self._move_to(OrderStatus.CANCELLED)

    def expire(self) -> None:
        """Cancel because the reservation ran out before payment arrived."""
        self.cancel()
        if self.payment_status == PaymentStatus.PENDING:
            self.payment_status = PaymentStatus.FAILED

    def record_payment(self, new_status: PaymentStatus) -> None:
        """Apply a payment status reported by the payment collaborator.

        Never changes the order status.  Re-reporting the current status
        is a no-op so retried callbacks are harmless.
        """
        if new_status == self.payment_status:
            return
        if self.payment_status == PaymentStatus.COMPLETED:
            raise InvalidStateError(
                f"Payment for order #{self.id} is already completed"
            )
        if new_status == PaymentStatus.COMPLETED and self.status == OrderStatus.CANCELLED:
            raise InvalidStateError(
                f"Cannot accept payment for cancelled order #{self.id}"
            )
        self.payment_status = new_status

    # --- Computed properties --------------------------------------------------

    @property
    def total(self) -> Money:
        result = Money.zero(self.items[0].unit_price.currency) if self.items else Money.zero()
        for item in self.items:
            result = result + item.subtotal
        return result

    @property
    def is_awaiting_payment(self) -> bool:
        return (
            self.status == OrderStatus.PENDING
            and self.payment_status != PaymentStatus.COMPLETED
        )

    # --- Internal helpers -----------------------------------------------------

    def _move_to(self, target: OrderStatus) -> None:
        if target not in _TRANSITIONS[self.status]:
            raise InvalidStateError(
                f"Cannot move order #{self.id} from {self.status.value} to {target.value}"
            )
        self.status = target
