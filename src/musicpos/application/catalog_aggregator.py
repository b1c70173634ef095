"""Application service: catalog views (queries only).

Joins products with their inventory records by format identifier and
groups the rows into one summary per product. Reads take no stock locks;
each call works from the snapshot the repositories return.
"""

from __future__ import annotations

from musicpos.application.dto import (
    CatalogFilter,
    FormatStockDTO,
    InventoryRowDTO,
    ProductSummaryDTO,
)
from musicpos.domain.exceptions import NotFoundError
from musicpos.domain.model.format import Format
from musicpos.domain.model.inventory import LOW_STOCK_THRESHOLD, InventoryRecord
from musicpos.domain.model.product import Product
from musicpos.domain.repository.inventory_repository import InventoryRepository
from musicpos.domain.repository.product_repository import ProductRepository


class CatalogAggregator:

    def __init__(
        self,
        product_repo: ProductRepository,
        inventory_repo: InventoryRepository,
    ) -> None:
        self._product_repo = product_repo
        self._inventory_repo = inventory_repo

    def list(self, filter: CatalogFilter | None = None) -> list[ProductSummaryDTO]:
        """Return one summary per product matching every option of *filter*.

        ``format_id`` selects products that carry the format but the summary
        still shows all of their formats. ``search_term`` is applied last,
        after the stock-based filters. Results are ordered by product ID.
        """
        filter = filter or CatalogFilter()
        fmt = Format.from_id(filter.format_id) if filter.format_id is not None else None

        summaries = [
            self._summarize(product, records)
            for product, records in self._joined(filter.product_id)
        ]

        if fmt is not None:
            summaries = [
                s for s in summaries if any(f.format_id == fmt.value for f in s.formats)
            ]
        if filter.low_stock_only:
            summaries = [s for s in summaries if s.total_stock < LOW_STOCK_THRESHOLD]
        if filter.search_term:
            term = filter.search_term.strip().lower()
            summaries = [s for s in summaries if _matches(s, term)]
        return summaries

    def get(self, product_id: int) -> ProductSummaryDTO:
        """Detail view of a single product."""
        summaries = self.list(CatalogFilter(product_id=product_id))
        if not summaries:
            raise NotFoundError(f"Product with ID '{product_id}' not found")
        return summaries[0]

    def rows(
        self,
        format_id: int | None = None,
        low_stock_only: bool = False,
        product_id: int | None = None,
    ) -> list[InventoryRowDTO]:
        """Flat (product, format) stock rows, one per inventory record."""
        fmt = Format.from_id(format_id) if format_id is not None else None
        result: list[InventoryRowDTO] = []

        for product, records in self._joined(product_id):
            if low_stock_only and _total(records) >= LOW_STOCK_THRESHOLD:
                continue
            for record in records:
                if fmt is not None and record.format is not fmt:
                    continue
                result.append(
                    InventoryRowDTO(
                        product_id=product.id,
                        title=product.title,
                        artist=product.artist,
                        genre=product.genre,
                        price=product.price.amount,
                        format_id=record.format.value,
                        quantity=record.quantity,
                        sku=record.sku,
                    )
                )
        return result

    # --- Internal helpers -----------------------------------------------------

    def _joined(
        self, product_id: int | None
    ) -> list[tuple[Product, list[InventoryRecord]]]:
        """Products with their records in display order, by product ID.

        Records whose product is not (yet) saved are left out, as are
        products without any record.
        """
        if product_id is not None:
            product = self._product_repo.get_by_id(product_id)
            products = [product] if product is not None else []
            records = self._inventory_repo.list_by_product(product_id)
        else:
            products = self._product_repo.list_all()
            records = self._inventory_repo.list_all()

        by_product: dict[int, list[InventoryRecord]] = {}
        for record in records:
            by_product.setdefault(record.product_id, []).append(record)

        joined = []
        for product in sorted(products, key=lambda p: p.id):
            product_records = by_product.get(product.id)
            if not product_records:
                continue
            product_records.sort(key=lambda r: r.format.sort_key)
            joined.append((product, product_records))
        return joined

    @staticmethod
    def _summarize(product: Product, records: list[InventoryRecord]) -> ProductSummaryDTO:
        return ProductSummaryDTO(
            product_id=product.id,
            title=product.title,
            artist=product.artist,
            genre=product.genre,
            price=product.price.amount,
            formats=[
                FormatStockDTO(
                    format_id=record.format.value,
                    name=record.format.display_name,
                    quantity=record.quantity,
                    sku=record.sku,
                )
                for record in records
            ],
            total_stock=_total(records),
        )


def _total(records: list[InventoryRecord]) -> int:
    return sum(record.quantity for record in records)


def _matches(summary: ProductSummaryDTO, term: str) -> bool:
    return (
        term in summary.title.lower()
        or term in summary.artist.lower()
        or term in summary.genre.lower()
    )
