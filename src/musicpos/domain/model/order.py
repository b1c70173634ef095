"""Order aggregate.

An Order only ever exists in its committed form: it is created together
with the stock decrement for its lines and never changes afterwards.
Drafts live with the caller and rejected submissions leave no record.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from musicpos.domain.exceptions import ValidationError
from musicpos.domain.model.format import Format
from musicpos.domain.model.inventory import InventoryKey
from musicpos.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    SUBMITTED = "SUBMITTED"
    COMMITTED = "COMMITTED"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class OrderLine:
    """One sold (product, format) with the unit price confirmed at sale time."""

    product_id: int
    format: Format
    quantity: Quantity
    unit_price: Money  # locked at order time, never re-read from the catalog

    @property
    def key(self) -> InventoryKey:
        return (self.product_id, self.format)

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for sales.

    Use the ``Order.create()`` factory for new orders. The ``__init__`` is
    intentionally simple so the repository can reconstitute persisted
    orders without re-validating.
    """

    id: int | None
    customer_id: int
    lines: list[OrderLine]
    ordered_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    status: OrderStatus = OrderStatus.COMMITTED

    @staticmethod
    def create(customer_id: int, lines: list[OrderLine]) -> Order:
        if not lines:
            raise ValidationError("Order must contain at least one item", field="items")
        return Order(
            id=None,
            customer_id=customer_id,
            lines=list(lines),
            status=OrderStatus.SUBMITTED,
        )

    def commit(self) -> None:
        """Transition SUBMITTED -> COMMITTED once stock has been taken."""
        if self.status != OrderStatus.SUBMITTED:
            raise ValidationError(
                f"Cannot commit order, current status is {self.status.value}, "
                f"expected SUBMITTED"
            )
        self.status = OrderStatus.COMMITTED

    def reject(self) -> None:
        """Transition SUBMITTED -> REJECTED. Rejected orders are never persisted."""
        if self.status != OrderStatus.SUBMITTED:
            raise ValidationError(
                f"Cannot reject order, current status is {self.status.value}, "
                f"expected SUBMITTED"
            )
        self.status = OrderStatus.REJECTED

    # --- Computed properties --------------------------------------------------

    @property
    def total(self) -> Money:
        result = Money.zero()
        for line in self.lines:
            result = result + line.line_total
        return result


def requested_quantities(lines: Iterable[OrderLine]) -> dict[InventoryKey, int]:
    """Units per (product, format), summed across duplicate lines.

    Keys keep the order in which they first appear in *lines*.
    """
    totals: dict[InventoryKey, int] = {}
    for line in lines:
        totals[line.key] = totals.get(line.key, 0) + line.quantity.value
    return totals
