"""Tests for the JSON-file repositories (real files under tmp_path)."""

import json
from datetime import date
from decimal import Decimal

import pytest

from musicpos.domain.exceptions import StorageError
from musicpos.domain.model.customer import Customer
from musicpos.domain.model.format import Format
from musicpos.domain.model.inventory import InventoryRecord
from musicpos.domain.model.order import Order, OrderLine, OrderStatus
from musicpos.domain.model.product import Product
from musicpos.domain.model.value_objects import Money, Quantity
from musicpos.infrastructure.persistence.json_customer_repository import JsonCustomerRepository
from musicpos.infrastructure.persistence.json_inventory_repository import JsonInventoryRepository
from musicpos.infrastructure.persistence.json_order_repository import JsonOrderRepository
from musicpos.infrastructure.persistence.json_product_repository import JsonProductRepository


def _product(product_id: int = 1) -> Product:
    return Product(
        id=product_id,
        title="Moonlight",
        artist="The Tides",
        genre="Jazz",
        label="Blue Note",
        release_date=date(1999, 4, 1),
        price=Money.of("19.99"),
    )


class TestJsonProductRepository:

    def test_creates_missing_file(self, tmp_path):
        path = tmp_path / "nested" / "products.json"
        JsonProductRepository(path)
        assert json.loads(path.read_text()) == []

    def test_round_trip_and_ids(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        assert repo.next_id() == 1
        repo.save(_product(1))
        assert repo.next_id() == 2
        assert repo.get_by_id(1) == _product(1)
        assert repo.get_by_id(2) is None

    def test_price_stored_as_decimal_string(self, tmp_path):
        path = tmp_path / "products.json"
        JsonProductRepository(path).save(_product())
        assert json.loads(path.read_text())[0]["price"] == "19.99"

    def test_duplicate_id_rejected(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(_product(1))
        with pytest.raises(StorageError, match="already stored"):
            repo.save(_product(1))

    def test_corrupt_file_is_storage_error(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text("{not json")
        repo = JsonProductRepository(path)
        with pytest.raises(StorageError, match="Cannot read"):
            repo.list_all()


class TestJsonInventoryRepository:

    def test_upsert_and_lookup(self, tmp_path):
        repo = JsonInventoryRepository(tmp_path / "inventory.json")
        repo.save_all([
            InventoryRecord(1, Format.VINYL, 5, "VIN-000001"),
            InventoryRecord(1, Format.CD, 0, "CD-000001"),
        ])
        repo.save_all([InventoryRecord(1, Format.CD, 7, "CD-000001")])

        assert repo.get(1, Format.CD).quantity == 7
        assert repo.get(1, Format.CASSETTE) is None
        assert len(repo.list_all()) == 2
        assert {r.format for r in repo.list_by_product(1)} == {Format.VINYL, Format.CD}

    def test_formats_stored_by_identifier(self, tmp_path):
        path = tmp_path / "inventory.json"
        JsonInventoryRepository(path).save_all([InventoryRecord(3, Format.CASSETTE, 2, "CAS-000003")])
        assert json.loads(path.read_text()) == [
            {"product_id": 3, "format_id": 3, "quantity": 2, "sku": "CAS-000003"}
        ]

    def test_returned_records_are_copies(self, tmp_path):
        repo = JsonInventoryRepository(tmp_path / "inventory.json")
        repo.save_all([InventoryRecord(1, Format.VINYL, 5, "VIN-000001")])
        record = repo.get(1, Format.VINYL)
        record.restock(0)
        assert repo.get(1, Format.VINYL).quantity == 5

    def test_remove_all(self, tmp_path):
        repo = JsonInventoryRepository(tmp_path / "inventory.json")
        repo.save_all([
            InventoryRecord(1, Format.VINYL, 5, "VIN-000001"),
            InventoryRecord(2, Format.VINYL, 5, "VIN-000002"),
        ])
        repo.remove_all([(1, Format.VINYL)])
        assert [r.product_id for r in repo.list_all()] == [2]

    def test_negative_quantity_on_disk_is_storage_error(self, tmp_path):
        path = tmp_path / "inventory.json"
        path.write_text(json.dumps([{"product_id": 1, "format_id": 1, "quantity": -1, "sku": "X"}]))
        with pytest.raises(StorageError, match="Corrupt inventory record"):
            JsonInventoryRepository(path).list_all()

    def test_no_temp_files_left_behind(self, tmp_path):
        repo = JsonInventoryRepository(tmp_path / "inventory.json")
        repo.save_all([InventoryRecord(1, Format.VINYL, 5, "VIN-000001")])
        assert not [p.name for p in tmp_path.iterdir() if p.suffix == ".tmp"]
        assert (tmp_path / "inventory.json").exists()


class TestJsonOrderRepository:

    def test_assigns_ids_and_round_trips(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        lines = [
            OrderLine(1, Format.VINYL, Quantity(3), Money.of("19.99")),
            OrderLine(2, Format.CD, Quantity(1), Money.of("0.01")),
        ]
        order = Order.create(customer_id=4, lines=lines)
        order.commit()
        repo.save(order)

        assert order.id == 1
        loaded = repo.get_by_id(1)
        assert loaded.customer_id == 4
        assert loaded.status == OrderStatus.COMMITTED
        assert loaded.lines == lines
        assert loaded.total.amount == Decimal("59.98")
        assert loaded.ordered_at == order.ordered_at

        second = Order.create(customer_id=4, lines=lines[:1])
        repo.save(second)
        assert second.id == 2

    def test_total_amount_persisted(self, tmp_path):
        path = tmp_path / "orders.json"
        order = Order.create(1, [OrderLine(1, Format.VINYL, Quantity(3), Money.of("19.99"))])
        JsonOrderRepository(path).save(order)
        assert json.loads(path.read_text())[0]["total_amount"] == "59.97"


class TestJsonCustomerRepository:

    def test_round_trip(self, tmp_path):
        repo = JsonCustomerRepository(tmp_path / "customers.json")
        assert repo.next_id() == 1
        customer = Customer(1, "Ada", "Lovelace", "ada@example.com", "555", "1 Analytical Way")
        repo.save(customer)
        assert repo.get_by_id(1) == customer
        assert repo.next_id() == 2
        assert repo.get_by_id(9) is None
