"""JSON-file-backed implementation of CustomerRepository."""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path

from musicpos.domain.exceptions import StorageError
from musicpos.domain.model.customer import Customer
from musicpos.domain.repository.customer_repository import CustomerRepository
from musicpos.infrastructure.persistence.json_file import JsonFile


class JsonCustomerRepository(CustomerRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def next_id(self) -> int:
        return max((c["id"] for c in self._file.read()), default=0) + 1

    def get_by_id(self, customer_id: int) -> Customer | None:
        for raw in self._file.read():
            if raw["id"] == customer_id:
                try:
                    return Customer(**raw)
                except TypeError as exc:
                    raise StorageError(f"Corrupt customer record #{customer_id}") from exc
        return None

    def save(self, customer: Customer) -> None:
        with self._file.update() as customers:
            if any(raw["id"] == customer.id for raw in customers):
                raise StorageError(f"Customer #{customer.id} is already stored")
            customers.append(asdict(customer))
