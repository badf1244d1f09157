"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.dto import OrderDTO, OrderItemSpec
from storefront.domain.exceptions import DomainException
from storefront.infrastructure import bootstrap


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'id1:3,id2:5' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(OrderItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"Created: {dto.created_at}")
    if dto.description:
        click.echo(f"Note:    {dto.description}")
    click.echo()
    click.echo(f"  {'Product':<26} {'Qty':>5}")
    click.echo(f"  {'-'*32}")
    for item in dto.items:
        click.echo(f"  {item.product_id:<26} {item.quantity:>5}")
    click.echo(f"  {'-'*32}")
    click.echo(f"  {'Order Total':<20} {dto.total_price:>11}")


@click.command("place")
@click.option("--user", "user_id", required=True, help="Id of the ordering user.")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.option("--description", default=None, help="Optional order note.")
def order_place(user_id: str, items: str, description: str | None) -> None:
    """Place an order, reserving stock for every item."""
    specs = _parse_items(items)
    handler = bootstrap.place_order_handler()

    try:
        dto = handler.handle(user_id=user_id, item_specs=specs, description=description)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("mine")
@click.option("--user", "user_id", required=True, help="Id of the ordering user.")
def order_mine(user_id: str) -> None:
    """List every order placed by a user."""
    handler = bootstrap.list_my_orders_handler()

    try:
        orders = handler.handle(user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<26} {'Status':<10} {'Items':>5} {'Total':>12}")
    click.echo("-" * 56)
    for dto in orders:
        click.echo(f"{dto.id:<26} {dto.status:<10} {len(dto.items):>5} {dto.total_price:>12}")
