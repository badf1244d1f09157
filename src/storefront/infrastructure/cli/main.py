import click

from storefront.domain.exceptions import DomainException
from storefront.infrastructure import bootstrap
from storefront.infrastructure.cli.order_commands import order_mine, order_place
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_show,
    product_update,
)
from storefront.infrastructure.config import get_settings
from storefront.infrastructure.logging_config import configure_logging


@click.group()
def cli() -> None:
    """Storefront: catalog and order placement"""
    configure_logging(get_settings())


@cli.group()
def order() -> None:
    """Place and list orders."""


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.command("init-db")
def init_db() -> None:
    """Create the indexes used by catalog listing and order lookup."""
    try:
        bootstrap.ensure_indexes()
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo("Indexes created.")


# Register subcommands
order.add_command(order_place)
order.add_command(order_mine)
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
