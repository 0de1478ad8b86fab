"""Timer-driven background runner for the reservation expiry sweep.

One pass every ``interval`` seconds until stopped.  Several processes
may run a sweeper against the same database; the sweep's row claiming
keeps them from working on the same reservation.
"""

from __future__ import annotations

import logging
import threading

from farmorders.application.sweep_reservations import SweepExpiredReservationsHandler
logger = logging.getLogger(__name__)


class ReservationSweeper:

    def __init__(self, handler: SweepExpiredReservationsHandler, interval: float = 60.0) -> None:
        self._handler = handler
        self._interval = interval
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self.run_forever, name="reservation-sweeper", daemon=True
        )
        self._thread.start()
        logger.info("reservation sweeper started", extra={"interval_seconds": self._interval})

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def run_forever(self) -> None:
        while not self._stop.is_set():
            self.run_once()
            self._stop.wait(self._interval)

    def run_once(self) -> None:
        try:
            self._handler.handle()
        except Exception:
            # The next tick retries; stopping the loop would leave stock held.
            logger.exception("reservation sweep pass failed")
