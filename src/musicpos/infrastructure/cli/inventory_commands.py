"""CLI commands for inventory management."""

from __future__ import annotations

import click

from musicpos.domain.model.format import Format
from musicpos.infrastructure.bootstrap import Services
from musicpos.infrastructure.cli.errors import FORMAT_CHOICE, reported_errors


@click.command("list")
@click.option("--format", "format_name", type=FORMAT_CHOICE, default=None, help="Only rows of this format.")
@click.option("--low-stock", is_flag=True, default=False, help="Only products with fewer than 10 units in total.")
@click.option("--product", "product_id", type=int, default=None, help="Only rows of this product.")
@click.pass_obj
def inventory_list(
    services: Services,
    format_name: str | None,
    low_stock: bool,
    product_id: int | None,
) -> None:
    """Show raw stock rows, one per product and format."""
    with reported_errors():
        fmt = Format.from_name(format_name) if format_name else None
        rows = services.aggregator.rows(
            format_id=fmt.value if fmt else None,
            low_stock_only=low_stock,
            product_id=product_id,
        )

    if not rows:
        click.echo("No inventory records found.")
        return

    click.echo(f"{'ID':<6} {'Title':<24} {'Format':<10} {'Qty':>6}  {'SKU':<12} {'Price':>8}")
    click.echo("-" * 72)
    for row in rows:
        name = Format(row.format_id).display_name
        click.echo(
            f"{row.product_id:<6} {row.title:<24} {name:<10} {row.quantity:>6}  "
            f"{row.sku:<12} {'$' + format(row.price, '.2f'):>8}"
        )


@click.command("restock")
@click.option("--product", "product_id", required=True, type=int, help="Product ID.")
@click.option("--format", "format_name", required=True, type=FORMAT_CHOICE, help="Format to restock.")
@click.option("--quantity", required=True, type=int, help="New quantity on hand (replaces the current value).")
@click.pass_obj
def inventory_restock(
    services: Services,
    product_id: int,
    format_name: str,
    quantity: int,
) -> None:
    """Set the quantity on hand for one product format."""
    with reported_errors():
        fmt = Format.from_name(format_name)
        current = services.ledger.get_record(product_id, fmt.value).quantity
        record = services.ledger.restock(product_id, fmt.value, quantity)

    click.echo(f"Inventory updated successfully! {record.sku}: {current} -> {record.quantity}")
