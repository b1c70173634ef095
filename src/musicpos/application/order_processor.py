"""Application service: ring up a sale.

Orchestrates the flow between the customer directory, the inventory
ledger and the order repository. An order is Submitted when this service
is called and ends either Committed (persisted with its stock taken) or
Rejected (nothing persisted, stock untouched).

Unit prices come from the request: the operator confirms each line's price
before submitting, and that price is what the customer pays even if the
catalog price differs by the time the order is committed.
"""

from __future__ import annotations

import logging

from musicpos.application.customer_directory import CustomerDirectory
from musicpos.application.dto import (
    OrderDTO,
    OrderItemSpec,
    OrderLineDTO,
    OrderReceipt,
)
from musicpos.domain.exceptions import DomainException, NotFoundError, ValidationError
from musicpos.domain.model.order import Order, OrderLine
from musicpos.domain.model.value_objects import Money, Quantity
from musicpos.domain.repository.order_repository import OrderRepository
from musicpos.domain.service.inventory_ledger import InventoryLedger

logger = logging.getLogger(__name__)


class OrderProcessor:

    def __init__(
        self,
        order_repo: OrderRepository,
        ledger: InventoryLedger,
        customers: CustomerDirectory,
    ) -> None:
        self._order_repo = order_repo
        self._ledger = ledger
        self._customers = customers

    def create_order(self, customer_id: int, items: list[OrderItemSpec]) -> OrderReceipt:
        """Validate, price and commit a multi-line order.

        Steps:
        1. Resolve the customer (fail if not found).
        2. Validate every line and build OrderLines with the confirmed price.
        3. Reserve stock for all lines at once; the order is saved while the
           stock locks are held, so either both happen or neither does.
        """
        self._customers.get(customer_id)

        if not items:
            raise ValidationError("Order must contain at least one item", field="items")

        lines = [self._build_line(index, spec) for index, spec in enumerate(items, start=1)]
        order = Order.create(customer_id=customer_id, lines=lines)

        try:
            self._ledger.reserve(order.lines, commit=lambda: self._commit(order))
        except DomainException as exc:
            order.reject()
            logger.warning("Order for customer #%d rejected: %s", customer_id, exc)
            raise

        logger.info(
            "Order #%d committed for customer #%d: %d line(s), total %s",
            order.id,
            customer_id,
            len(order.lines),
            order.total,
        )
        return OrderReceipt(order_id=order.id, total_amount=order.total.amount)  # type: ignore[arg-type]

    def get_order(self, order_id: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise NotFoundError(f"Order #{order_id} not found")
        return self._to_dto(order)

    # --- Internal helpers -----------------------------------------------------

    def _commit(self, order: Order) -> None:
        order.commit()
        self._order_repo.save(order)

    def _build_line(self, index: int, spec: OrderItemSpec) -> OrderLine:
        prefix = f"items[{index}]"
        try:
            quantity = Quantity(spec.quantity)
        except ValidationError as exc:
            raise ValidationError(f"Line {index}: {exc}", field=f"{prefix}.quantity") from exc
        try:
            unit_price = Money.of(spec.unit_price)
        except ValidationError as exc:
            raise ValidationError(f"Line {index}: {exc}", field=f"{prefix}.unit_price") from exc
        try:
            record = self._ledger.get_record(spec.product_id, spec.format_id)
        except NotFoundError as exc:
            raise NotFoundError(f"Line {index}: {exc}") from exc

        return OrderLine(
            product_id=record.product_id,
            format=record.format,
            quantity=quantity,
            unit_price=unit_price,
        )

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_dto(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            customer_id=order.customer_id,
            status=order.status.value,
            lines=[
                OrderLineDTO(
                    product_id=line.product_id,
                    format_name=line.format.display_name,
                    quantity=line.quantity.value,
                    unit_price=str(line.unit_price),
                    line_total=str(line.line_total),
                )
                for line in order.lines
            ],
            total=str(order.total),
            ordered_at=order.ordered_at.strftime("%Y-%m-%d %H:%M UTC"),
        )
