"""Application service: product registration and lookup.

A product and the inventory records for its chosen formats are created
as one unit. The records are written first; they stay invisible to the
catalog (which joins through products) until the product itself is
saved, and are withdrawn again if that save fails.
"""

from __future__ import annotations

import logging
import threading
from contextlib import AbstractContextManager, nullcontext
from datetime import date
from decimal import Decimal

from musicpos.application.dto import FormatSelection
from musicpos.domain.exceptions import NotFoundError, ValidationError
from musicpos.domain.model.format import Format
from musicpos.domain.model.inventory import InventoryRecord, make_sku
from musicpos.domain.model.product import Product
from musicpos.domain.model.value_objects import Money
from musicpos.domain.repository.product_repository import ProductRepository
from musicpos.domain.service.inventory_ledger import InventoryLedger

logger = logging.getLogger(__name__)


class ProductCatalog:

    def __init__(
        self,
        product_repo: ProductRepository,
        ledger: InventoryLedger,
        store_lock: AbstractContextManager | None = None,
    ) -> None:
        self._product_repo = product_repo
        self._ledger = ledger
        self._id_lock = threading.Lock()
        self._store_lock = store_lock if store_lock is not None else nullcontext()

    def register(
        self,
        title: str,
        artist: str,
        release_date: date | str,
        genre: str,
        label: str,
        price: str | Decimal | int | float,
        formats: list[FormatSelection],
    ) -> Product:
        """Add a new product to the catalog, stocked in *formats*."""
        if not formats:
            raise ValidationError("Select at least one format", field="formats")

        selections: list[tuple[Format, int]] = []
        seen: set[Format] = set()
        for selection in formats:
            fmt = Format.from_id(selection.format_id)
            if fmt in seen:
                raise ValidationError(
                    f"Format {fmt.display_name} selected more than once", field="formats"
                )
            seen.add(fmt)
            selections.append((fmt, selection.quantity))

        unit_price = Money.of(price, field="price")

        # Held from ID allocation through both writes
        with self._id_lock, self._store_lock:
            product = Product.create(
                product_id=self._product_repo.next_id(),
                title=title,
                artist=artist,
                genre=genre,
                label=label,
                release_date=release_date,
                price=unit_price,
            )
            records = [
                InventoryRecord(
                    product_id=product.id,
                    format=fmt,
                    quantity=quantity,
                    sku=make_sku(product.id, fmt),
                )
                for fmt, quantity in selections
            ]
            self._ledger.open_records(records, commit=lambda: self._product_repo.save(product))

        logger.info(
            "Registered product #%d '%s' by %s in %s",
            product.id,
            product.title,
            product.artist,
            ", ".join(fmt.display_name for fmt, _ in selections),
        )
        return product

    def get(self, product_id: int) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise NotFoundError(f"Product with ID '{product_id}' not found")
        return product
