"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from dataclasses import dataclass

from musicpos.application.catalog_aggregator import CatalogAggregator
from musicpos.application.customer_directory import CustomerDirectory
from musicpos.application.order_processor import OrderProcessor
from musicpos.application.product_catalog import ProductCatalog
from musicpos.domain.service.inventory_ledger import InventoryLedger
from musicpos.infrastructure.config import Settings
from musicpos.infrastructure.persistence.json_customer_repository import (
    JsonCustomerRepository,
)
from musicpos.infrastructure.persistence.json_file import LockFile
from musicpos.infrastructure.persistence.json_inventory_repository import (
    JsonInventoryRepository,
)
from musicpos.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from musicpos.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


@dataclass(frozen=True)
class Services:
    """Application services sharing one ledger (and so one set of stock locks)."""

    catalog: ProductCatalog
    ledger: InventoryLedger
    aggregator: CatalogAggregator
    orders: OrderProcessor
    customers: CustomerDirectory


def build_services(settings: Settings) -> Services:
    data_dir = settings.data_dir
    product_repo = JsonProductRepository(data_dir / "products.json")
    inventory_repo = JsonInventoryRepository(data_dir / "inventory.json")
    order_repo = JsonOrderRepository(data_dir / "orders.json")
    customer_repo = JsonCustomerRepository(data_dir / "customers.json")

    # One lock for the whole data directory, shared with other processes
    store_lock = LockFile(data_dir / "musicpos.lock")
    ledger = InventoryLedger(inventory_repo, store_lock)
    customers = CustomerDirectory(customer_repo, store_lock)
    return Services(
        catalog=ProductCatalog(product_repo, ledger, store_lock),
        ledger=ledger,
        aggregator=CatalogAggregator(product_repo, inventory_repo),
        orders=OrderProcessor(order_repo, ledger, customers),
        customers=customers,
    )
