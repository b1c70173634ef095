"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from pathlib import Path

from musicpos.domain.exceptions import StorageError, ValidationError
from musicpos.domain.model.product import Product
from musicpos.domain.model.value_objects import Money
from musicpos.domain.repository.product_repository import ProductRepository
from musicpos.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> int:
        products = self._file.read()
        if not products:
            return 1
        return max(p["id"] for p in products) + 1

    def get_by_id(self, product_id: int) -> Product | None:
        for raw in self._file.read():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        products = [self._to_domain(raw) for raw in self._file.read()]
        return sorted(products, key=lambda p: p.id)

    def save(self, product: Product) -> None:
        with self._file.update() as products:
            if any(raw["id"] == product.id for raw in products):
                raise StorageError(f"Product #{product.id} is already stored")
            products.append(self._to_raw(product))

    # --- Serialization helpers ------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "title": product.title,
            "artist": product.artist,
            "genre": product.genre,
            "label": product.label,
            "release_date": product.release_date.isoformat(),
            "price": str(product.price.amount),
            "currency": product.price.currency,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        try:
            return Product(
                id=raw["id"],
                title=raw["title"],
                artist=raw["artist"],
                genre=raw["genre"],
                label=raw["label"],
                release_date=date.fromisoformat(raw["release_date"]),
                price=Money(Decimal(raw["price"]), raw.get("currency", "USD")),
            )
        except (KeyError, ArithmeticError, ValueError, ValidationError) as exc:
            raise StorageError(f"Corrupt product record {raw!r}") from exc
