"""CLI commands for browsing the catalog."""

from __future__ import annotations

import click

from musicpos.application.dto import CatalogFilter, ProductSummaryDTO
from musicpos.domain.model.format import Format
from musicpos.infrastructure.bootstrap import Services
from musicpos.infrastructure.cli.errors import FORMAT_CHOICE, reported_errors


def _format_badges(summary: ProductSummaryDTO) -> str:
    return "  ".join(f"{f.name} ({f.quantity})" for f in summary.formats)


@click.command("list")
@click.option("--format", "format_name", type=FORMAT_CHOICE, default=None, help="Only products carrying this format.")
@click.option("--low-stock", is_flag=True, default=False, help="Only products with fewer than 10 units in total.")
@click.option("--search", default=None, help="Match title, artist or genre (case-insensitive).")
@click.pass_obj
def catalog_list(
    services: Services,
    format_name: str | None,
    low_stock: bool,
    search: str | None,
) -> None:
    """List products with their stock per format."""
    with reported_errors():
        fmt = Format.from_name(format_name) if format_name else None
        summaries = services.aggregator.list(
            CatalogFilter(
                format_id=fmt.value if fmt else None,
                low_stock_only=low_stock,
                search_term=search,
            )
        )

    if not summaries:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Title':<24} {'Artist':<20} {'Price':>8} {'Stock':>6}  Formats")
    click.echo("-" * 90)
    for s in summaries:
        marker = "!" if s.is_low_stock else " "
        click.echo(
            f"{s.product_id:<6} {s.title:<24} {s.artist:<20} "
            f"{'$' + format(s.price, '.2f'):>8} {s.total_stock:>5}{marker}  {_format_badges(s)}"
        )


@click.command("show")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.pass_obj
def catalog_show(services: Services, product_id: int) -> None:
    """Show a product with its inventory by format."""
    with reported_errors():
        product = services.catalog.get(product_id)
        summary = services.aggregator.get(product_id)

    click.echo(f"{product.title}")
    click.echo(f"Product ID:   {product.id}")
    click.echo(f"Artist:       {product.artist}")
    click.echo(f"Genre:        {product.genre}")
    click.echo(f"Label:        {product.label}")
    click.echo(f"Released:     {product.release_date.isoformat()}")
    click.echo(f"Price:        {product.price}")
    click.echo(f"Total Stock:  {summary.total_stock}")
    click.echo()
    click.echo(f"  {'Format':<10} {'Quantity':>8}  {'SKU'}")
    click.echo(f"  {'-'*32}")
    for f in summary.formats:
        click.echo(f"  {f.name:<10} {f.quantity:>8}  {f.sku}")
