"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from musicpos.domain.exceptions import StorageError, ValidationError
from musicpos.domain.model.format import Format
from musicpos.domain.model.order import Order, OrderLine, OrderStatus
from musicpos.domain.model.value_objects import Money, Quantity
from musicpos.domain.repository.order_repository import OrderRepository
from musicpos.infrastructure.persistence.json_file import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._file.read():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def save(self, order: Order) -> None:
        with self._file.update() as orders:
            if order.id is None:
                order.id = max((o["id"] for o in orders), default=0) + 1
            elif any(raw["id"] == order.id for raw in orders):
                raise StorageError(f"Order #{order.id} is already stored")
            orders.append(self._to_raw(order))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "customer_id": order.customer_id,
            "status": order.status.value,
            "ordered_at": order.ordered_at.isoformat(),
            "total_amount": str(order.total.amount),
            "lines": [
                {
                    "product_id": line.product_id,
                    "format_id": line.format.value,
                    "quantity": line.quantity.value,
                    "unit_price": str(line.unit_price.amount),
                    "currency": line.unit_price.currency,
                }
                for line in order.lines
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        try:
            lines = [
                OrderLine(
                    product_id=item["product_id"],
                    format=Format(item["format_id"]),
                    quantity=Quantity(item["quantity"]),
                    unit_price=Money(Decimal(item["unit_price"]), item.get("currency", "USD")),
                )
                for item in raw["lines"]
            ]
            return Order(
                id=raw["id"],
                customer_id=raw["customer_id"],
                lines=lines,
                ordered_at=datetime.fromisoformat(raw["ordered_at"]),
                status=OrderStatus(raw.get("status", OrderStatus.COMMITTED.value)),
            )
        except (KeyError, ArithmeticError, ValueError, ValidationError) as exc:
            raise StorageError(f"Corrupt order record #{raw.get('id')}") from exc
