"""JSON-file-backed implementation of InventoryRepository."""

from __future__ import annotations

from pathlib import Path

from musicpos.domain.exceptions import StorageError, ValidationError
from musicpos.domain.model.format import Format
from musicpos.domain.model.inventory import InventoryKey, InventoryRecord
from musicpos.domain.repository.inventory_repository import InventoryRepository
from musicpos.infrastructure.persistence.json_file import JsonFile


class JsonInventoryRepository(InventoryRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- InventoryRepository interface ----------------------------------------

    def get(self, product_id: int, fmt: Format) -> InventoryRecord | None:
        for raw in self._file.read():
            if raw["product_id"] == product_id and raw["format_id"] == fmt.value:
                return self._to_domain(raw)
        return None

    def list_by_product(self, product_id: int) -> list[InventoryRecord]:
        return [
            self._to_domain(raw)
            for raw in self._file.read()
            if raw["product_id"] == product_id
        ]

    def list_all(self) -> list[InventoryRecord]:
        return [self._to_domain(raw) for raw in self._file.read()]

    def save_all(self, records: list[InventoryRecord]) -> None:
        pending = {(r.product_id, r.format.value): r for r in records}
        with self._file.update() as rows:
            # Upsert: replace if exists, otherwise append
            for i, raw in enumerate(rows):
                key = (raw["product_id"], raw["format_id"])
                if key in pending:
                    rows[i] = self._to_raw(pending.pop(key))
            rows.extend(self._to_raw(record) for record in pending.values())

    def remove_all(self, keys: list[InventoryKey]) -> None:
        doomed = {(product_id, fmt.value) for product_id, fmt in keys}
        with self._file.update() as rows:
            rows[:] = [
                raw for raw in rows
                if (raw["product_id"], raw["format_id"]) not in doomed
            ]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(record: InventoryRecord) -> dict:
        return {
            "product_id": record.product_id,
            "format_id": record.format.value,
            "quantity": record.quantity,
            "sku": record.sku,
        }

    @staticmethod
    def _to_domain(raw: dict) -> InventoryRecord:
        try:
            return InventoryRecord(
                product_id=raw["product_id"],
                format=Format(raw["format_id"]),
                quantity=raw["quantity"],
                sku=raw["sku"],
            )
        except (KeyError, ValueError, ValidationError) as exc:
            raise StorageError(f"Corrupt inventory record {raw!r}") from exc
