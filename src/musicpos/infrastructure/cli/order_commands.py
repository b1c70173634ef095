"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from musicpos.application.dto import OrderDTO, OrderItemSpec
from musicpos.domain.model.format import Format
from musicpos.infrastructure.bootstrap import Services
from musicpos.infrastructure.cli.errors import reported_errors


def _parse_items(raw: tuple[str, ...]) -> list[OrderItemSpec]:
    """Parse ('1:vinyl:3:19.99', ...) into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for item in raw:
        parts = [p.strip() for p in item.split(":")]
        if len(parts) != 4:
            raise click.BadParameter(
                f"Invalid item format '{item}'. Expected 'ProductID:Format:Quantity:UnitPrice'."
            )
        product_str, format_name, qty_str, price = parts
        try:
            product_id = int(product_str)
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid product ID or quantity in '{item}'."
            )
        with reported_errors():
            fmt = Format.from_name(format_name)
        specs.append(
            OrderItemSpec(
                product_id=product_id,
                format_id=fmt.value,
                quantity=qty,
                unit_price=price,
            )
        )
    return specs


@click.command("create")
@click.option("--customer", "customer_id", required=True, type=int, help="Customer ID.")
@click.option(
    "--item", "items", multiple=True, required=True,
    help="Line as 'ProductID:Format:Quantity:UnitPrice'. Repeat for each line.",
)
@click.pass_obj
def order_create(services: Services, customer_id: int, items: tuple[str, ...]) -> None:
    """Ring up a sale."""
    specs = _parse_items(items)

    with reported_errors():
        receipt = services.orders.create_order(customer_id=customer_id, items=specs)

    click.echo(
        f"Order created successfully! Order ID: {receipt.order_id}, "
        f"Total: ${receipt.total_amount:.2f}"
    )


def _display_order(dto: OrderDTO) -> None:
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Customer: #{dto.customer_id}")
    click.echo(f"Ordered:  {dto.ordered_at}")
    click.echo()
    click.echo(f"  {'Product':<8} {'Format':<10} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for line in dto.lines:
        click.echo(
            f"  {line.product_id:<8} {line.format_name:<10} {line.quantity:>5} "
            f"{line.unit_price:>10} {line.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.pass_obj
def order_show(services: Services, order_id: int) -> None:
    """Show details of an existing order."""
    with reported_errors():
        dto = services.orders.get_order(order_id)

    _display_order(dto)
