"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from musicpos.domain.model.inventory import LOW_STOCK_THRESHOLD


# --- Inputs -------------------------------------------------------------------


@dataclass(frozen=True)
class FormatSelection:
    """Input: a format to carry at registration and its opening stock."""

    format_id: int
    quantity: int = 0


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: one line of an order as confirmed by the operator."""

    product_id: int
    format_id: int
    quantity: int
    unit_price: str | Decimal | int | float


@dataclass(frozen=True)
class CatalogFilter:
    """Input: catalog listing options, combined with logical AND."""

    format_id: int | None = None
    low_stock_only: bool = False
    search_term: str | None = None
    product_id: int | None = None


# --- Outputs ------------------------------------------------------------------


@dataclass(frozen=True)
class FormatStockDTO:
    format_id: int
    name: str
    quantity: int
    sku: str


@dataclass(frozen=True)
class ProductSummaryDTO:
    """Output: one product with its stock per format."""

    product_id: int
    title: str
    artist: str
    genre: str
    price: Decimal
    formats: list[FormatStockDTO]
    total_stock: int

    @property
    def is_low_stock(self) -> bool:
        return self.total_stock < LOW_STOCK_THRESHOLD


@dataclass(frozen=True)
class InventoryRowDTO:
    """Output: one raw (product, format) stock row."""

    product_id: int
    title: str
    artist: str
    genre: str
    price: Decimal
    format_id: int
    quantity: int
    sku: str


@dataclass(frozen=True)
class OrderReceipt:
    order_id: int
    total_amount: Decimal


@dataclass(frozen=True)
class OrderLineDTO:
    """Output: a single order line as displayed to the user."""

    product_id: int
    format_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$19.99"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    customer_id: int
    status: str
    lines: list[OrderLineDTO]
    total: str
    ordered_at: str
