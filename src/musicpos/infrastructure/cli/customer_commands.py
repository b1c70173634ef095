"""CLI commands for customers."""

from __future__ import annotations

import click

from musicpos.infrastructure.bootstrap import Services
from musicpos.infrastructure.cli.errors import reported_errors


@click.command("add")
@click.option("--first-name", required=True)
@click.option("--last-name", required=True)
@click.option("--email", required=True)
@click.option("--phone", default="")
@click.option("--address", default="")
@click.pass_obj
def customer_add(
    services: Services,
    first_name: str,
    last_name: str,
    email: str,
    phone: str,
    address: str,
) -> None:
    """Register a new customer."""
    with reported_errors():
        customer = services.customers.register(
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone=phone,
            address=address,
        )

    click.echo(f"Customer registered successfully! ID: {customer.id}")


@click.command("show")
@click.option("--id", "customer_id", required=True, type=int, help="Customer ID.")
@click.pass_obj
def customer_show(services: Services, customer_id: int) -> None:
    """Look up a customer by ID."""
    with reported_errors():
        customer = services.customers.get(customer_id)

    click.echo(customer.display_name)
