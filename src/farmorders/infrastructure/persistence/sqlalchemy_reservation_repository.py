"""SQLAlchemy-backed implementation of ReservationRepository."""

from __future__ import annotations

from collections.abc import Collection
from datetime import datetime

from sqlalchemy import Select, select, update
from sqlalchemy.orm import Session

from farmorders.domain.model.order import OrderStatus, PaymentStatus
from farmorders.domain.model.reservation import Reservation
from farmorders.domain.repository.reservation_repository import ReservationRepository
from farmorders.infrastructure.persistence.database import as_utc
from farmorders.infrastructure.persistence.orm import OrderRow, ReservationRow


class SqlAlchemyReservationRepository(ReservationRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- ReservationRepository interface --------------------------------------

    def get_by_order_id(self, order_id: int) -> Reservation | None:
        row = self._session.scalars(
            select(ReservationRow)
            .where(ReservationRow.order_id == order_id)
            .execution_options(populate_existing=True)
        ).first()
        return self._to_domain(row) if row is not None else None

    def save(self, reservation: Reservation) -> None:
        row = self._session.scalars(
            select(ReservationRow).where(ReservationRow.order_id == reservation.order_id)
        ).first()
        if row is None:
            row = ReservationRow(order_id=reservation.order_id)
            self._session.add(row)
        row.expires_at = as_utc(reservation.expires_at)
        row.released = reservation.released
        self._session.flush()

    def mark_released(self, order_id: int) -> bool:
        result = self._session.execute(
            update(ReservationRow)
            .where(
                ReservationRow.order_id == order_id,
                ReservationRow.released.is_(False),
            )
            .values(released=True)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def list_expired(self, now: datetime, limit: int) -> list[Reservation]:
        rows = self._session.scalars(self._expired_query(now).limit(limit))
        return [self._to_domain(row) for row in rows]

    def claim_next_expired(
        self, now: datetime, exclude: Collection[int] = ()
    ) -> Reservation | None:
        stmt = self._expired_query(now)
        if exclude:
            stmt = stmt.where(ReservationRow.order_id.not_in(list(exclude)))
        # Every mutation path locks orders before order_reservations.
        stmt = stmt.limit(1).with_for_update(skip_locked=True, of=OrderRow)
        row = self._session.scalars(stmt).first()
        return self._to_domain(row) if row is not None else None

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _expired_query(now: datetime) -> Select[tuple[ReservationRow]]:
        return (
            select(ReservationRow)
            .join(OrderRow, OrderRow.id == ReservationRow.order_id)
            .where(
                ReservationRow.expires_at < as_utc(now),
                ReservationRow.released.is_(False),
                OrderRow.status == OrderStatus.PENDING.value,
                OrderRow.payment_status != PaymentStatus.COMPLETED.value,
            )
            .order_by(ReservationRow.expires_at, ReservationRow.id)
            .execution_options(populate_existing=True)
        )

    @staticmethod
    def _to_domain(row: ReservationRow) -> Reservation:
        return Reservation(
            order_id=row.order_id,
            expires_at=as_utc(row.expires_at),
            released=row.released,
        )
