"""Translation of core errors into click errors."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import click

from musicpos.domain.exceptions import (
    DomainException,
    InfrastructureError,
    InsufficientStockError,
)


@contextmanager
def reported_errors() -> Iterator[None]:
    """Turn domain and storage errors into ``click.ClickException``."""
    try:
        yield
    except InsufficientStockError as exc:
        raise click.ClickException(
            f"{exc} (reduce the quantity to at most {exc.available})"
        ) from exc
    except DomainException as exc:
        raise click.ClickException(str(exc)) from exc
    except InfrastructureError as exc:
        raise click.ClickException(f"Storage failure, safe to retry: {exc}") from exc


FORMAT_CHOICE = click.Choice(["vinyl", "cd", "cassette"], case_sensitive=False)
