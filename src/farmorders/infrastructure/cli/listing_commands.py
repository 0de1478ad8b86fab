"""CLI commands for seller listings and their stock."""

from __future__ import annotations

import click

from farmorders.application.add_listing import AddListingHandler
from farmorders.application.set_listing import SetListingHandler
from farmorders.application.show_listings import ShowListingsHandler
from farmorders.domain.exceptions import DomainException
from farmorders.infrastructure.bootstrap import unit_of_work


@click.command("add")
@click.option("--seller", required=True, help="Seller identity.")
@click.option("--name", required=True, help="Listing name.")
@click.option("--price", required=True, help="Unit price (e.g. 120.00).")
@click.option("--quantity", required=True, type=int, help="Units on hand.")
@click.option("--unit", default="kg", show_default=True, help="Unit of measure.")
def listing_add(seller: str, name: str, price: str, quantity: int, unit: str) -> None:
    """Add a new listing."""
    handler = AddListingHandler(uow=unit_of_work())

    try:
        item = handler.handle(seller_id=seller, name=name, price=price, quantity=quantity, unit=unit)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Listing #{item.id} '{item.name}' added at {item.unit_price}/{item.unit} "
        f"({item.quantity_available} on hand)"
    )


@click.command("set")
@click.option("--id", "listed_item_id", required=True, help="Listed item ID.")
@click.option("--seller", required=True, help="Seller identity.")
@click.option("--quantity", type=int, default=None, help="New on-hand quantity.")
@click.option("--available/--unavailable", default=None, help="Sellable or not.")
def listing_set(listed_item_id: str, seller: str, quantity: int | None, available: bool | None) -> None:
    """Edit stock level or availability of a listing."""
    if quantity is None and available is None:
        raise click.UsageError("Nothing to change: pass --quantity and/or --available/--unavailable")

    handler = SetListingHandler(uow=unit_of_work())

    try:
        handler.handle(listed_item_id, seller, quantity=quantity, available=available)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Listing #{listed_item_id} updated.")


@click.command("list")
def listing_list() -> None:
    """Show all listings and their stock."""
    lines = ShowListingsHandler(uow=unit_of_work()).handle()

    if not lines:
        click.echo("No listings found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Seller':<10} {'Price':>14} {'Available':>10} {'Status':<12}")
    click.echo("-" * 77)
    for line in lines:
        click.echo(
            f"{line.listed_item_id:<6} {line.name:<20} {line.seller_id:<10} "
            f"{line.unit_price:>14} {line.available:>10} {line.status:<12}"
        )
