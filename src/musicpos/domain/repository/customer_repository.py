"""Abstract repository for Customer records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from musicpos.domain.model.customer import Customer


class CustomerRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Return the next unused customer ID."""

    @abstractmethod
    def get_by_id(self, customer_id: int) -> Customer | None:
        """Return a customer by ID, or None if not found."""

    @abstractmethod
    def save(self, customer: Customer) -> None:
        """Persist a new customer."""
