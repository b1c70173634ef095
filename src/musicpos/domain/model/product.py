"""Product aggregate.

Products live independently of orders and of stock levels. Once
registered a product does not change; the stock it carries per format is
tracked by InventoryRecord.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from musicpos.domain.exceptions import ValidationError
from musicpos.domain.model.value_objects import Money


@dataclass(frozen=True)
class Product:
    """A release in the catalog."""

    id: int
    title: str
    artist: str
    genre: str
    label: str
    release_date: date
    price: Money

    @staticmethod
    def create(
        product_id: int,
        title: str,
        artist: str,
        genre: str,
        label: str,
        release_date: date | str,
        price: Money,
    ) -> Product:
        """Create a new product, enforcing all invariants."""
        fields = {"title": title, "artist": artist, "genre": genre, "label": label}
        for name, value in fields.items():
            if not isinstance(value, str) or not value.strip():
                raise ValidationError(f"Product {name} is required", field=name)

        return Product(
            id=product_id,
            title=title.strip(),
            artist=artist.strip(),
            genre=genre.strip(),
            label=label.strip(),
            release_date=_parse_release_date(release_date),
            price=price,
        )


def _parse_release_date(value: date | str) -> date:
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Product release date is required", field="release_date")
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise ValidationError(
            f"Invalid release date {value!r}, expected YYYY-MM-DD",
            field="release_date",
        ) from exc
