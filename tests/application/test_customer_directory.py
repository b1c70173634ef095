"""Integration tests for customer registration and lookup."""

import pytest

from musicpos.application.customer_directory import CustomerDirectory
from musicpos.domain.exceptions import NotFoundError, ValidationError
from tests.fakes import FakeCustomerRepository


class TestCustomerDirectory:

    def test_register_assigns_ids(self):
        directory = CustomerDirectory(FakeCustomerRepository())
        first = directory.register("Ada", "Lovelace", "ada@example.com")
        second = directory.register("Alan", "Turing", "alan@example.com", phone="555-0101")
        assert (first.id, second.id) == (1, 2)
        assert directory.get(2).phone == "555-0101"

    def test_get_unknown(self):
        directory = CustomerDirectory(FakeCustomerRepository())
        with pytest.raises(NotFoundError, match="Customer with ID '3'"):
            directory.get(3)

    def test_invalid_customer_not_saved(self):
        repo = FakeCustomerRepository()
        directory = CustomerDirectory(repo)
        with pytest.raises(ValidationError):
            directory.register("", "Lovelace", "ada@example.com")
        assert repo.get_by_id(1) is None
