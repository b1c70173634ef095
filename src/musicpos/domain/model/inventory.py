"""InventoryRecord: stock on hand for one (product, format) pair.

A record exists for every format a product is offered in. Zero quantity
is a valid, persistent state; records are never deleted.
"""

from __future__ import annotations

from dataclasses import dataclass

from musicpos.domain.exceptions import InsufficientStockError, ValidationError
from musicpos.domain.model.format import Format

InventoryKey = tuple[int, Format]

# A product is low on stock when its total across formats is strictly below this.
LOW_STOCK_THRESHOLD = 10


def make_sku(product_id: int, fmt: Format) -> str:
    return f"{fmt.sku_prefix}-{product_id:06d}"


@dataclass
class InventoryRecord:
    """Invariant: ``quantity`` is never negative."""

    product_id: int
    format: Format
    quantity: int
    sku: str

    def __post_init__(self) -> None:
        _check_quantity(self.quantity)

    @property
    def key(self) -> InventoryKey:
        return (self.product_id, self.format)

    def restock(self, new_quantity: int) -> None:
        """Overwrite the quantity on hand (absolute, not a delta)."""
        _check_quantity(new_quantity)
        self.quantity = new_quantity

    def withdraw(self, quantity: int) -> None:
        """Remove sold units.

        Raises InsufficientStockError if fewer than *quantity* are on hand.
        """
        if quantity <= 0:
            raise ValidationError("Withdrawal quantity must be positive")
        if quantity > self.quantity:
            raise InsufficientStockError(
                product_id=self.product_id,
                format=self.format,
                requested=quantity,
                available=self.quantity,
            )
        self.quantity -= quantity


def _check_quantity(quantity: int) -> None:
    if not isinstance(quantity, int) or isinstance(quantity, bool):
        raise ValidationError(
            f"Stock quantity must be an integer, got {type(quantity).__name__}",
            field="quantity",
        )
    if quantity < 0:
        raise ValidationError(
            f"Stock quantity cannot be negative, got {quantity}", field="quantity"
        )
