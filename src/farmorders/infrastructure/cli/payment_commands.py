"""CLI commands standing in for the payment collaborator's callback."""

from __future__ import annotations

import click

from farmorders.application.record_payment import RecordPaymentHandler
from farmorders.domain.exceptions import DomainException
from farmorders.domain.model.order import PaymentStatus
from farmorders.infrastructure.bootstrap import unit_of_work


@click.command("record")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option(
    "--status",
    required=True,
    type=click.Choice([s.value for s in PaymentStatus]),
    help="Payment status reported by the provider.",
)
def payment_record(order_id: int, status: str) -> None:
    """Record a payment status update for an order."""
    handler = RecordPaymentHandler(uow=unit_of_work())

    try:
        dto = handler.handle(order_id, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} payment is now {dto.payment_status} (order {dto.status}).")
