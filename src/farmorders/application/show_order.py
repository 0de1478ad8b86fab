"""Application service: Show Order use case (query)."""

from __future__ import annotations

from farmorders.application.dto import OrderDTO, to_order_dto
from farmorders.domain.exceptions import EntityNotFoundError, ForbiddenError
from farmorders.domain.model.principal import Principal
from farmorders.domain.repository.unit_of_work import UnitOfWork


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int, principal: Principal) -> OrderDTO:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")
            if order.buyer_id != principal.buyer_id and not principal.is_seller(order.seller_id):
                raise ForbiddenError(f"Order #{order_id} does not belong to you")
            reservation = uow.reservations.get_by_order_id(order_id)
        return to_order_dto(order, reservation)
