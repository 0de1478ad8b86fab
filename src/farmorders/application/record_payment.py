"""Application service: Record Payment use case.

The write path for the external payment collaborator.  It only records
what it is told; it never cancels or confirms the order.  An order whose
payment never completes is cancelled later by the expiry sweep.
"""

from __future__ import annotations

import logging

from farmorders.application.dto import OrderDTO, to_order_dto
from farmorders.domain.exceptions import EntityNotFoundError, ValidationError
from farmorders.domain.model.order import PaymentStatus
from farmorders.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class RecordPaymentHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int, new_status: str) -> OrderDTO:
        try:
            status = PaymentStatus(new_status.strip().lower())
        except ValueError as exc:
            allowed = ", ".join(s.value for s in PaymentStatus)
            raise ValidationError(
                f"Unknown payment status '{new_status}' (expected one of: {allowed})"
            ) from exc

        with self._uow as uow:
            order = uow.orders.get_by_id(order_id, for_update=True)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")

            previous = order.payment_status
            order.record_payment(status)
            uow.orders.save(order)
            reservation = uow.reservations.get_by_order_id(order_id)
            uow.commit()

        logger.info(
            "payment status recorded",
            extra={
                "order_id": order_id,
                "from": previous.value,
                "to": status.value,
            },
        )
        return to_order_dto(order, reservation)
