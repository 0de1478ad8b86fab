"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from farmorders.application.cancel_order import CancelOrderHandler
from farmorders.application.complete_order import CompleteOrderHandler
from farmorders.application.confirm_order import ConfirmOrderHandler
from farmorders.application.decline_order import DeclineOrderHandler
from farmorders.application.dto import OrderDTO, OrderItemSpec, PlaceOrderRequest
from farmorders.application.list_orders import ListOrdersHandler
from farmorders.application.place_order import PlaceOrderHandler
from farmorders.application.show_order import ShowOrderHandler
from farmorders.domain.exceptions import DomainException
from farmorders.domain.model.order import DEFAULT_PAYMENT_METHOD
from farmorders.domain.model.principal import Principal
from farmorders.domain.service.restock_reconciler import ReconcileOutcome
from farmorders.infrastructure.bootstrap import receipt_notifier, settings, unit_of_work


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse '1:5@120.00,2:3@80' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for entry in raw.split(","):
        entry = entry.strip()
        if ":" not in entry or "@" not in entry:
            raise click.BadParameter(
                f"Invalid item format '{entry}'. Expected 'ItemId:Qty@UnitPrice'."
            )
        item_id, rest = entry.split(":", 1)
        qty_str, price = rest.split("@", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for item '{item_id}'."
            )
        specs.append(
            OrderItemSpec(
                listed_item_id=item_id.strip(),
                quantity=qty,
                unit_price=price.strip(),
            )
        )
    return specs


def _principal(buyer: str, seller: str | None) -> Principal:
    try:
        return Principal(buyer_id=buyer, seller_id=seller)
    except DomainException as exc:
        raise click.ClickException(str(exc))


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status}, payment={dto.payment_status})")
    click.echo(f"Buyer:    {dto.buyer_id}")
    click.echo(f"Seller:   {dto.seller_id}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo(f"Deliver:  {dto.delivery_address}" + (f" on {dto.delivery_date}" if dto.delivery_date else ""))
    if dto.reservation_expires_at:
        click.echo(f"Reserved until {dto.reservation_expires_at}")
    click.echo()
    click.echo(f"  {'Item':<20} {'Qty':>5} {'Price':>14} {'Subtotal':>14}")
    click.echo(f"  {'-'*55}")
    for item in dto.items:
        click.echo(
            f"  {item.item_name:<20} {item.quantity:>5} {item.unit_price:>14} {item.subtotal:>14}"
        )
    click.echo(f"  {'-'*55}")
    click.echo(f"  {'Order Total':<27} {dto.total:>28}")


@click.command("place")
@click.option("--buyer", required=True, help="Buyer identity.")
@click.option("--as-seller", "seller", default=None, help="Caller's own seller identity, if any.")
@click.option("--items", required=True, help="Items as 'ItemId:Qty@UnitPrice,...'.")
@click.option("--address", required=True, help="Delivery address.")
@click.option("--date", "delivery_date", type=click.DateTime(formats=["%Y-%m-%d"]), default=None, help="Delivery date (YYYY-MM-DD).")
@click.option("--payment-method", default=DEFAULT_PAYMENT_METHOD, show_default=True)
@click.option("--notes", default=None)
def order_place(buyer, seller, items, address, delivery_date, payment_method, notes) -> None:
    """Place a new order (reserves stock)."""
    request = PlaceOrderRequest(
        items=_parse_items(items),
        delivery_address=address,
        delivery_date=delivery_date.date() if delivery_date else None,
        payment_method=payment_method,
        notes=notes,
    )
    handler = PlaceOrderHandler(
        uow=unit_of_work(),
        notifier=receipt_notifier(),
        reservation_ttl=settings().reservation_ttl,
    )

    try:
        dto = handler.handle(_principal(buyer, seller), request)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} placed.")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.option("--buyer", required=True, help="Caller's buyer identity.")
@click.option("--as-seller", "seller", default=None, help="Caller's seller identity, if any.")
def order_show(order_id: int, buyer: str, seller: str | None) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(uow=unit_of_work())

    try:
        dto = handler.handle(order_id, _principal(buyer, seller))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--buyer", required=True, help="Buyer identity.")
def order_list(buyer: str) -> None:
    """List a buyer's orders, newest first."""
    orders = ListOrdersHandler(uow=unit_of_work()).handle(buyer)

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Status':<10} {'Payment':<10} {'Items':>5} {'Total':>14}  Created")
    click.echo("-" * 70)
    for dto in orders:
        click.echo(
            f"{dto.id:<6} {dto.status:<10} {dto.payment_status:<10} "
            f"{len(dto.items):>5} {dto.total:>14}  {dto.created_at}"
        )


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
@click.option("--buyer", required=True, help="Buyer identity.")
def order_cancel(order_id: int, buyer: str) -> None:
    """Cancel a pending order (restores stock)."""
    handler = CancelOrderHandler(uow=unit_of_work())

    try:
        outcome = handler.handle(order_id, buyer)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} cancelled — {_restock_note(outcome)}.")


def _restock_note(outcome: ReconcileOutcome) -> str:
    if outcome == ReconcileOutcome.RESTOCKED:
        return "stock restored"
    return "stock had already been restored"


def _seller_command(handler_cls, order_id: int, buyer: str, seller: str):
    try:
        return handler_cls(uow=unit_of_work()).handle(order_id, _principal(buyer, seller))
    except DomainException as exc:
        raise click.ClickException(str(exc))


@click.command("confirm")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to confirm.")
@click.option("--buyer", required=True, help="Caller's buyer identity.")
@click.option("--as-seller", "seller", required=True, help="Caller's seller identity.")
def order_confirm(order_id: int, buyer: str, seller: str) -> None:
    """Seller accepts a pending order."""
    _seller_command(ConfirmOrderHandler, order_id, buyer, seller)
    click.echo(f"Order #{order_id} confirmed.")


@click.command("complete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to complete.")
@click.option("--buyer", required=True, help="Caller's buyer identity.")
@click.option("--as-seller", "seller", required=True, help="Caller's seller identity.")
def order_complete(order_id: int, buyer: str, seller: str) -> None:
    """Seller marks a confirmed order as delivered."""
    _seller_command(CompleteOrderHandler, order_id, buyer, seller)
    click.echo(f"Order #{order_id} completed.")


@click.command("decline")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to decline.")
@click.option("--buyer", required=True, help="Caller's buyer identity.")
@click.option("--as-seller", "seller", required=True, help="Caller's seller identity.")
def order_decline(order_id: int, buyer: str, seller: str) -> None:
    """Seller calls off a pending or confirmed order (restores stock)."""
    outcome = _seller_command(DeclineOrderHandler, order_id, buyer, seller)
    click.echo(f"Order #{order_id} declined — {_restock_note(outcome)}.")
