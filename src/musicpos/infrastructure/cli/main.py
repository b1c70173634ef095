from pathlib import Path

import click

from musicpos.infrastructure.bootstrap import build_services
from musicpos.infrastructure.cli.catalog_commands import catalog_list, catalog_show
from musicpos.infrastructure.cli.customer_commands import customer_add, customer_show
from musicpos.infrastructure.cli.errors import reported_errors
from musicpos.infrastructure.cli.inventory_commands import inventory_list, inventory_restock
from musicpos.infrastructure.cli.order_commands import order_create, order_show
from musicpos.infrastructure.cli.product_commands import product_add
from musicpos.infrastructure.config import load_settings
from musicpos.infrastructure.logging import setup_logging


@click.group()
@click.option(
    "--data-dir", type=click.Path(file_okay=False, path_type=Path), default=None,
    help="Directory holding the JSON data files.",
)
@click.option("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR.")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None, log_level: str | None) -> None:
    """Music Store POS: catalog, stock and sales"""
    overrides: dict = {}
    if data_dir is not None:
        overrides["data_dir"] = data_dir
    if log_level is not None:
        overrides["logging"] = {"level": log_level}

    with reported_errors():
        settings = load_settings(overrides)
        setup_logging(settings.logging)
        ctx.obj = build_services(settings)


@cli.group()
def catalog() -> None:
    """Browse the catalog."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def inventory() -> None:
    """Manage inventory."""


@cli.group()
def customer() -> None:
    """Manage customers."""


@cli.group()
def order() -> None:
    """Manage orders."""


# Register subcommands
catalog.add_command(catalog_list)
catalog.add_command(catalog_show)
product.add_command(product_add)
inventory.add_command(inventory_list)
inventory.add_command(inventory_restock)
customer.add_command(customer_add)
customer.add_command(customer_show)
order.add_command(order_create)
order.add_command(order_show)
