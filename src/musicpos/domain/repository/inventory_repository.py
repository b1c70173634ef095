"""Abstract repository for InventoryRecord."""

from __future__ import annotations

from abc import ABC, abstractmethod

from musicpos.domain.model.format import Format
from musicpos.domain.model.inventory import InventoryKey, InventoryRecord


class InventoryRepository(ABC):
    """Implementations return fresh copies: mutating a returned record has
    no effect until it is passed back to ``save_all``."""

    @abstractmethod
    def get(self, product_id: int, fmt: Format) -> InventoryRecord | None:
        """Return the record for a (product, format) pair, or None."""

    @abstractmethod
    def list_by_product(self, product_id: int) -> list[InventoryRecord]:
        """Return every record of one product (any order)."""

    @abstractmethod
    def list_all(self) -> list[InventoryRecord]:
        """Return every inventory record."""

    @abstractmethod
    def save_all(self, records: list[InventoryRecord]) -> None:
        """Persist new or updated records as a single write."""

    @abstractmethod
    def remove_all(self, keys: list[InventoryKey]) -> None:
        """Withdraw records written by a registration that failed to complete."""
