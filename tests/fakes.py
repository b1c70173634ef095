"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in a dict. No file I/O, no side effects.
"""

from __future__ import annotations

from dataclasses import replace

from musicpos.domain.model.customer import Customer
from musicpos.domain.model.format import Format
from musicpos.domain.model.inventory import InventoryKey, InventoryRecord
from musicpos.domain.model.order import Order
from musicpos.domain.model.product import Product
from musicpos.domain.repository.customer_repository import CustomerRepository
from musicpos.domain.repository.inventory_repository import InventoryRepository
from musicpos.domain.repository.order_repository import OrderRepository
from musicpos.domain.repository.product_repository import ProductRepository


class FakeOrderRepository(OrderRepository):

    def __init__(self) -> None:
        self._store: dict[int, Order] = {}
        self._next_id = 1
        self.fail_next_save: Exception | None = None

    def get_by_id(self, order_id: int) -> Order | None:
        return self._store.get(order_id)

    def save(self, order: Order) -> None:
        if self.fail_next_save is not None:
            exc, self.fail_next_save = self.fail_next_save, None
            raise exc
        if order.id is None:
            order.id = self._next_id
            self._next_id += 1
        self._store[order.id] = order

    def all(self) -> list[Order]:
        return list(self._store.values())


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[int, Product] = {}
        self.fail_next_save: Exception | None = None
        for p in products or []:
            self._store[p.id] = p

    def next_id(self) -> int:
        return max(self._store, default=0) + 1

    def get_by_id(self, product_id: int) -> Product | None:
        return self._store.get(product_id)

    def list_all(self) -> list[Product]:
        return sorted(self._store.values(), key=lambda p: p.id)

    def save(self, product: Product) -> None:
        if self.fail_next_save is not None:
            exc, self.fail_next_save = self.fail_next_save, None
            raise exc
        self._store[product.id] = product


class FakeInventoryRepository(InventoryRepository):
    """Hands out copies, like the JSON repository does."""

    def __init__(self, records: list[InventoryRecord] | None = None) -> None:
        self._store: dict[InventoryKey, InventoryRecord] = {}
        for record in records or []:
            self._store[record.key] = replace(record)

    def get(self, product_id: int, fmt: Format) -> InventoryRecord | None:
        record = self._store.get((product_id, fmt))
        return replace(record) if record is not None else None

    def list_by_product(self, product_id: int) -> list[InventoryRecord]:
        return [replace(r) for r in self._store.values() if r.product_id == product_id]

    def list_all(self) -> list[InventoryRecord]:
        return [replace(r) for r in self._store.values()]

    def save_all(self, records: list[InventoryRecord]) -> None:
        for record in records:
            self._store[record.key] = replace(record)

    def remove_all(self, keys: list[InventoryKey]) -> None:
        for key in keys:
            self._store.pop(key, None)

    def quantities(self) -> dict[InventoryKey, int]:
        return {key: record.quantity for key, record in self._store.items()}


class FakeCustomerRepository(CustomerRepository):

    def __init__(self, customers: list[Customer] | None = None) -> None:
        self._store: dict[int, Customer] = {}
        for c in customers or []:
            self._store[c.id] = c

    def next_id(self) -> int:
        return max(self._store, default=0) + 1

    def get_by_id(self, customer_id: int) -> Customer | None:
        return self._store.get(customer_id)

    def save(self, customer: Customer) -> None:
        self._store[customer.id] = customer
