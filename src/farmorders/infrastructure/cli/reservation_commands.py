"""CLI commands for the reservation expiry sweep."""

from __future__ import annotations

import click

from farmorders.application.sweep_reservations import SweepExpiredReservationsHandler
from farmorders.domain.exceptions import DomainException
from farmorders.infrastructure.bootstrap import settings, unit_of_work
from farmorders.infrastructure.sweeper import ReservationSweeper


def _handler() -> SweepExpiredReservationsHandler:
    config = settings()
    return SweepExpiredReservationsHandler(
        uow=unit_of_work(),
        reservation_ttl=config.reservation_ttl,
        batch_size=config.sweep_batch_size,
    )


@click.command("sweep")
@click.option("--watch", is_flag=True, default=False, help="Keep sweeping on a timer.")
@click.option("--interval", type=float, default=None, help="Seconds between passes (with --watch).")
def reservation_sweep(watch: bool, interval: float | None) -> None:
    """Release expired reservations: restock and cancel unpaid orders."""
    if watch:
        sweeper = ReservationSweeper(
            _handler(), interval=interval or settings().sweep_interval_seconds
        )
        click.echo("Sweeping expired reservations, press Ctrl+C to stop.")
        try:
            sweeper.run_forever()
        except KeyboardInterrupt:
            click.echo("Stopped.")
        return

    try:
        report = _handler().handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Expired {len(report.expired)} order(s): {report.expired or '-'}")
    if report.failed:
        click.echo(f"Failed {len(report.failed)} order(s), will retry: {report.failed}")


@click.command("expired")
def reservation_expired() -> None:
    """List reservations a sweep would release right now."""
    reservations = _handler().preview()

    if not reservations:
        click.echo("No expired reservations.")
        return

    click.echo(f"{'Order':<8} Expired at")
    click.echo("-" * 36)
    for reservation in reservations:
        click.echo(f"{reservation.order_id:<8} {reservation.expires_at:%Y-%m-%d %H:%M:%S UTC}")
