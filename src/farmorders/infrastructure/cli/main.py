import click

from farmorders.infrastructure.bootstrap import settings
from farmorders.infrastructure.cli.listing_commands import listing_add, listing_list, listing_set
from farmorders.infrastructure.cli.order_commands import (
    order_cancel,
    order_complete,
    order_confirm,
    order_decline,
    order_list,
    order_place,
    order_show,
)
from farmorders.infrastructure.cli.payment_commands import payment_record
from farmorders.infrastructure.cli.reservation_commands import (
    reservation_expired,
    reservation_sweep,
)
from farmorders.infrastructure.logging_config import configure_logging


@click.group()
def cli() -> None:
    """farmorders — marketplace order placement and stock reservation"""
    try:
        config = settings()
    except ValueError as exc:
        raise click.ClickException(str(exc))
    configure_logging(config.log_level, config.log_format)


@cli.group()
def order() -> None:
    """Place and manage orders."""


@cli.group()
def payment() -> None:
    """Record payment updates."""


@cli.group()
def reservation() -> None:
    """Inspect and sweep stock reservations."""


@cli.group()
def listing() -> None:
    """Manage seller listings."""


# Register subcommands
order.add_command(order_cancel)
order.add_command(order_complete)
order.add_command(order_confirm)
order.add_command(order_decline)
order.add_command(order_list)
order.add_command(order_place)
order.add_command(order_show)
payment.add_command(payment_record)
reservation.add_command(reservation_expired)
reservation.add_command(reservation_sweep)
listing.add_command(listing_add)
listing.add_command(listing_list)
listing.add_command(listing_set)
