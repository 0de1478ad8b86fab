"""SQLAlchemy-backed implementation of OrderRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from farmorders.domain.model.order import (
    DeliveryInfo,
    Order,
    OrderLineItem,
    OrderStatus,
    PaymentStatus,
)
from farmorders.domain.model.value_objects import Money, Quantity
from farmorders.domain.repository.order_repository import OrderRepository
from farmorders.infrastructure.persistence.database import as_utc
from farmorders.infrastructure.persistence.orm import OrderLineItemRow, OrderRow


class SqlAlchemyOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int, for_update: bool = False) -> Order | None:
        stmt = (
            select(OrderRow)
            .where(OrderRow.id == order_id)
            .options(selectinload(OrderRow.items))
            .execution_options(populate_existing=True)
        )
        if for_update:
            stmt = stmt.with_for_update(of=OrderRow)
        row = self._session.scalars(stmt).first()
        return self._to_domain(row) if row is not None else None

    def list_for_buyer(self, buyer_id: str) -> list[Order]:
        rows = self._session.scalars(
            select(OrderRow)
            .where(OrderRow.buyer_id == buyer_id)
            .options(selectinload(OrderRow.items))
            .order_by(OrderRow.created_at.desc(), OrderRow.id.desc())
        )
        return [self._to_domain(row) for row in rows]

    def save(self, order: Order) -> None:
        if order.id is None:
            row = self._to_row(order)
            self._session.add(row)
            self._session.flush()
            order.id = row.id
            return

        row = self._session.get(OrderRow, order.id)
        if row is None:
            self._session.add(self._to_row(order))
        else:
            # Line items are immutable; only the header moves.
            row.status = order.status.value
            row.payment_status = order.payment_status.value
        self._session.flush()

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_row(order: Order) -> OrderRow:
        total = order.total
        return OrderRow(
            id=order.id,
            buyer_id=order.buyer_id,
            seller_id=order.seller_id,
            total_amount=total.amount,
            currency=total.currency,
            delivery_address=order.delivery.address,
            delivery_date=order.delivery.delivery_date,
            payment_method=order.delivery.payment_method,
            notes=order.delivery.notes,
            status=order.status.value,
            payment_status=order.payment_status.value,
            created_at=order.created_at,
            items=[
                OrderLineItemRow(
                    listed_item_id=item.listed_item_id,
                    item_name=item.item_name,
                    quantity_ordered=item.quantity.value,
                    unit_price=item.unit_price.amount,
                    subtotal=item.subtotal.amount,
                )
                for item in order.items
            ],
        )

    @staticmethod
    def _to_domain(row: OrderRow) -> Order:
        items = [
            OrderLineItem(
                listed_item_id=i.listed_item_id,
                item_name=i.item_name,
                quantity=Quantity(i.quantity_ordered),
                unit_price=Money.of(i.unit_price, row.currency),
            )
            for i in row.items
        ]
        return Order(
            id=row.id,
            buyer_id=row.buyer_id,
            seller_id=row.seller_id,
            items=items,
            delivery=DeliveryInfo(
                address=row.delivery_address,
                delivery_date=row.delivery_date,
                payment_method=row.payment_method,
                notes=row.notes,
            ),
            status=OrderStatus(row.status),
            payment_status=PaymentStatus(row.payment_status),
            created_at=as_utc(row.created_at),
        )
