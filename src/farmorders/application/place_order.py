"""Application service: Place Order use case.

Orchestrates the whole purchase inside one unit of work:

1. Validate the request (catalog lookups, single seller, no self-purchase).
2. Take stock out of the ledger for every line.
3. Persist the order and its line items.
4. Open the reservation hold (soft: a failure is logged, not fatal).
5. Commit, then hand a receipt to the notifier (also soft).

Any failure in steps 1-3 abandons the transaction, so no stock, order or
line item from this request survives.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from farmorders.application.clock import Clock, utcnow
from farmorders.application.dto import OrderDTO, PlaceOrderRequest, to_order_dto
from farmorders.application.notifications import ReceiptNotifier
from farmorders.domain.model.order import DeliveryInfo, Order
from farmorders.domain.model.principal import Principal
from farmorders.domain.model.reservation import DEFAULT_RESERVATION_TTL
from farmorders.domain.repository.unit_of_work import UnitOfWork
from farmorders.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)
from farmorders.domain.service.order_intake_validator import OrderIntakeValidator
from farmorders.domain.service.reservation_manager import ReservationManager

logger = logging.getLogger(__name__)


class PlaceOrderHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        notifier: ReceiptNotifier | None = None,
        reservation_ttl: timedelta = DEFAULT_RESERVATION_TTL,
        clock: Clock = utcnow,
    ) -> None:
        self._uow = uow
        self._notifier = notifier
        self._reservation_ttl = reservation_ttl
        self._clock = clock

    def handle(self, principal: Principal, request: PlaceOrderRequest) -> OrderDTO:
        delivery = DeliveryInfo(
            address=request.delivery_address,
            delivery_date=request.delivery_date,
            payment_method=request.payment_method,
            notes=request.notes,
        )
        now = self._clock()

        with self._uow as uow:
            validated = OrderIntakeValidator(uow.ledger).validate(principal, request.items)

            InventoryReservationService(uow.ledger).reserve_lines(validated.items)

            order = Order.create(
                buyer_id=principal.buyer_id,
                seller_id=validated.seller_id,
                items=list(validated.items),
                delivery=delivery,
                created_at=now,
            )
            uow.orders.save(order)

            manager = ReservationManager(uow.reservations, self._reservation_ttl)
            reservation = manager.try_open(order.id, now, uow.savepoint)  # type: ignore[arg-type]

            uow.commit()

        logger.info(
            "order placed",
            extra={
                "order_id": order.id,
                "buyer_id": order.buyer_id,
                "seller_id": order.seller_id,
                "total": str(order.total),
            },
        )
        dto = to_order_dto(order, reservation)
        self._send_receipt(dto)
        return dto

    def _send_receipt(self, dto: OrderDTO) -> None:
        if self._notifier is None:
            return
        try:
            self._notifier.send_receipt(dto)
        except Exception:
            logger.warning(
                "receipt notification failed", extra={"order_id": dto.id}, exc_info=True
            )
