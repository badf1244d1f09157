"""CLI commands for the product catalog."""

from __future__ import annotations

from typing import Any

import click

from storefront.application.dto import ProductDTO
from storefront.application.response import catalog_page_response
from storefront.domain.exceptions import DomainException
from storefront.domain.model.product import Category
from storefront.infrastructure import bootstrap

CATEGORY_CHOICES = [c.value for c in Category]


def _display_product(dto: ProductDTO) -> None:
    click.echo(f"Product {dto.id}  '{dto.name}'")
    click.echo(f"Category:    {dto.category}")
    click.echo(f"Price:       {dto.price}")
    click.echo(f"Stock:       {dto.stock}")
    click.echo(f"Description: {dto.description}")
    click.echo(f"Owner:       {dto.owner_id}  (last updated by {dto.updated_by})")
    click.echo(f"Created:     {dto.created_at}")


@click.command("add")
@click.option("--user", "user_id", required=True, help="Id of the user creating the product.")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--description", required=True, help="Product description.")
@click.option("--category", required=True, type=click.Choice(CATEGORY_CHOICES), help="Product category.")
@click.option("--stock", default=0, show_default=True, type=int, help="Units in stock.")
def product_add(
    user_id: str, name: str, price: str, description: str, category: str, stock: int
) -> None:
    """Add a new product to the catalog."""
    handler = bootstrap.add_product_handler()

    try:
        dto = handler.handle(
            user_id=user_id,
            name=name,
            price=price,
            description=description,
            category=category,
            stock=stock,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id} '{dto.name}' added at {dto.price} ({dto.stock} in stock)")


@click.command("list")
@click.option("--page", default=None, type=int, help="Page number (default 1).")
@click.option("--limit", default=None, type=int, help="Page size (default 10).")
@click.option("--search", default=None, help="Case-insensitive name filter.")
def product_list(page: int | None, limit: int | None, search: str | None) -> None:
    """List products, newest first."""
    handler = bootstrap.list_products_handler()

    try:
        result = handler.handle(page=page, limit=limit, search=search)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    response = catalog_page_response(result)
    click.echo(
        f"{response.message}: page {response.page_number}, "
        f"{response.page_size} of {response.total_size}"
    )
    if not result.products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<26} {'Name':<24} {'Category':<12} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 83)
    for p in result.products:
        click.echo(f"{p.id:<26} {p.name:<24} {p.category:<12} {p.price:>10} {p.stock:>7}")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_show(product_id: str) -> None:
    """Show a single product."""
    handler = bootstrap.show_product_handler()

    try:
        dto = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(dto)


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--user", "user_id", required=True, help="Id of the user making the change.")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--description", default=None, help="New description.")
@click.option("--category", default=None, type=click.Choice(CATEGORY_CHOICES), help="New category.")
@click.option("--stock", default=None, type=int, help="New stock level.")
def product_update(product_id: str, user_id: str, **fields: Any) -> None:
    """Update one or more fields of a product."""
    changes = {name: value for name, value in fields.items() if value is not None}
    handler = bootstrap.update_product_handler()

    try:
        dto = handler.handle(product_id=product_id, user_id=user_id, changes=changes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id} updated ({', '.join(sorted(changes))})")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(product_id: str) -> None:
    """Remove a product from the catalog."""
    handler = bootstrap.delete_product_handler()

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} removed.")
