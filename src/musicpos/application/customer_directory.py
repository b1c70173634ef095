"""Application service: customer registration and lookup."""

from __future__ import annotations

import logging
import threading
from contextlib import AbstractContextManager, nullcontext

from musicpos.domain.exceptions import NotFoundError
from musicpos.domain.model.customer import Customer
from musicpos.domain.repository.customer_repository import CustomerRepository

logger = logging.getLogger(__name__)


class CustomerDirectory:

    def __init__(
        self,
        customer_repo: CustomerRepository,
        store_lock: AbstractContextManager | None = None,
    ) -> None:
        self._customer_repo = customer_repo
        self._id_lock = threading.Lock()
        self._store_lock = store_lock if store_lock is not None else nullcontext()

    def register(
        self,
        first_name: str,
        last_name: str,
        email: str,
        phone: str = "",
        address: str = "",
    ) -> Customer:
        with self._id_lock, self._store_lock:
            customer = Customer.create(
                customer_id=self._customer_repo.next_id(),
                first_name=first_name,
                last_name=last_name,
                email=email,
                phone=phone,
                address=address,
            )
            self._customer_repo.save(customer)

        logger.info("Registered customer #%d", customer.id)
        return customer

    def get(self, customer_id: int) -> Customer:
        customer = self._customer_repo.get_by_id(customer_id)
        if customer is None:
            raise NotFoundError(f"Customer with ID '{customer_id}' not found")
        return customer
