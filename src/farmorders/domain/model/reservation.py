"""Reservation — the time-boxed hold that guards an order's stock.

Every order gets exactly one reservation when it is placed.  If the
order is neither paid nor confirmed before ``expires_at``, the expiry
sweep gives the stock back.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

DEFAULT_RESERVATION_TTL = timedelta(minutes=15)


@dataclass
class Reservation:
    """Hold on one order's stock.

    ``released`` only ever goes from False to True outside of
    ``reopen()``; whoever flips it owns the restock.
    """

    order_id: int
    expires_at: datetime
    released: bool = False

    @staticmethod
    def open(order_id: int, now: datetime, ttl: timedelta) -> Reservation:
        return Reservation(order_id=order_id, expires_at=now + ttl)

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at < now

    def reopen(self, now: datetime, ttl: timedelta) -> None:
        self.expires_at = now + ttl
        self.released = False
