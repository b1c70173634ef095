"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from musicpos.application.dto import FormatSelection
from musicpos.domain.model.format import Format
from musicpos.infrastructure.bootstrap import Services
from musicpos.infrastructure.cli.errors import reported_errors


def _parse_formats(raw: tuple[str, ...]) -> list[FormatSelection]:
    """Parse ('vinyl:5', 'cd') into FormatSelection list (quantity defaults to 0)."""
    selections: list[FormatSelection] = []
    for item in raw:
        name, _, qty_str = item.partition(":")
        with reported_errors():
            fmt = Format.from_name(name)
        try:
            qty = int(qty_str) if qty_str else 0
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for format '{name}'."
            )
        selections.append(FormatSelection(format_id=fmt.value, quantity=qty))
    return selections


@click.command("add")
@click.option("--title", required=True, help="Release title.")
@click.option("--artist", required=True, help="Artist name.")
@click.option("--release-date", required=True, help="Release date (YYYY-MM-DD).")
@click.option("--genre", required=True, help="Genre.")
@click.option("--label", required=True, help="Record label.")
@click.option("--price", required=True, help="Price (e.g. 19.99).")
@click.option(
    "--format", "formats", multiple=True, required=True,
    help="Format and opening stock as 'vinyl:5'. Repeat for each format.",
)
@click.pass_obj
def product_add(
    services: Services,
    title: str,
    artist: str,
    release_date: str,
    genre: str,
    label: str,
    price: str,
    formats: tuple[str, ...],
) -> None:
    """Register a new product in one or more formats."""
    selections = _parse_formats(formats)

    with reported_errors():
        product = services.catalog.register(
            title=title,
            artist=artist,
            release_date=release_date,
            genre=genre,
            label=label,
            price=price,
            formats=selections,
        )

    click.echo(f"Product added successfully! ID: {product.id}")
