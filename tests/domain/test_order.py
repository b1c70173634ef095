"""Unit tests for the Order aggregate."""

from decimal import Decimal

import pytest

from musicpos.domain.exceptions import ValidationError
from musicpos.domain.model.format import Format
from musicpos.domain.model.order import Order, OrderLine, OrderStatus, requested_quantities
from musicpos.domain.model.value_objects import Money, Quantity


def _line(product_id: int = 1, fmt: Format = Format.VINYL, qty: int = 1, price: str = "10.00") -> OrderLine:
    return OrderLine(
        product_id=product_id,
        format=fmt,
        quantity=Quantity(qty),
        unit_price=Money.of(price),
    )


class TestOrderCreate:

    def test_new_order_is_submitted(self):
        order = Order.create(customer_id=1, lines=[_line()])
        assert order.status == OrderStatus.SUBMITTED
        assert order.id is None

    def test_empty_order_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            Order.create(customer_id=1, lines=[])


class TestOrderTotals:

    def test_total_is_sum_of_lines(self):
        order = Order.create(1, [_line(qty=3, price="19.99"), _line(2, Format.CD, 2, "12.50")])
        assert order.total.amount == Decimal("84.97")

    def test_hundred_cent_lines_sum_exactly(self):
        lines = [_line(product_id=i, price="0.01") for i in range(1, 101)]
        order = Order.create(1, lines)
        assert order.total.amount == Decimal("1.00")
        assert str(order.total) == "$1.00"

    def test_requested_quantities_sum_duplicates_in_first_seen_order(self):
        lines = [_line(qty=3), _line(2, Format.CD, 1), _line(qty=4)]
        totals = requested_quantities(lines)
        assert list(totals) == [(1, Format.VINYL), (2, Format.CD)]
        assert totals == {
            (1, Format.VINYL): 7,
            (2, Format.CD): 1,
        }


class TestOrderTransitions:

    def test_lifecycle_states(self):
        assert [s.value for s in OrderStatus] == ["SUBMITTED", "COMMITTED", "REJECTED"]

    def test_commit(self):
        order = Order.create(1, [_line()])
        order.commit()
        assert order.status == OrderStatus.COMMITTED

    def test_commit_twice_rejected(self):
        order = Order.create(1, [_line()])
        order.commit()
        with pytest.raises(ValidationError, match="expected SUBMITTED"):
            order.commit()

    def test_reject(self):
        order = Order.create(1, [_line()])
        order.reject()
        assert order.status == OrderStatus.REJECTED

    def test_rejected_order_cannot_commit(self):
        order = Order.create(1, [_line()])
        order.reject()
        with pytest.raises(ValidationError):
            order.commit()
