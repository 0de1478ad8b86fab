"""Application service: List Orders use case (query)."""

from __future__ import annotations

from farmorders.application.dto import OrderDTO, to_order_dto
from farmorders.domain.repository.unit_of_work import UnitOfWork


class ListOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, buyer_id: str) -> list[OrderDTO]:
        """All of a buyer's orders, newest first."""
        with self._uow as uow:
            orders = uow.orders.list_for_buyer(buyer_id)
        return [to_order_dto(order) for order in orders]
