"""Domain service: Inventory Ledger.

The ledger is the only component allowed to change stock. It serializes
conflicting mutations with one lock per (product, format) key:

- Multi-key operations take their locks in canonical key order
  (product ID, then format ID), so two orders can never deadlock.
- Operations on disjoint keys never wait for each other.
- The read-check-decrement sequence of an order runs entirely under the
  locks of every key it touches, so concurrent orders cannot oversell.

Key locks only exist inside one process. When several processes share a
store, the composition root passes a *store_lock* (a reentrant context
manager such as a lock file) that every critical section takes first,
before any key lock.

Reads do not take stock locks; repositories hand out snapshot copies so a
reader never sees a record half way through a change.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Iterator
from contextlib import AbstractContextManager, contextmanager, nullcontext
from dataclasses import replace

from musicpos.domain.exceptions import (
    InsufficientStockError,
    NotFoundError,
    ValidationError,
)
from musicpos.domain.model.format import Format
from musicpos.domain.model.inventory import InventoryKey, InventoryRecord
from musicpos.domain.model.order import OrderLine, requested_quantities
from musicpos.domain.repository.inventory_repository import InventoryRepository

logger = logging.getLogger(__name__)


def _key_order(key: InventoryKey) -> tuple[int, int]:
    product_id, fmt = key
    return (product_id, fmt.value)


class InventoryLedger:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        store_lock: AbstractContextManager | None = None,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._store_lock = store_lock if store_lock is not None else nullcontext()
        self._locks: dict[InventoryKey, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    # --- Queries --------------------------------------------------------------

    def get_record(self, product_id: int, format_id: int) -> InventoryRecord:
        fmt = Format.from_id(format_id)
        return self._require(product_id, fmt)

    def list_by_product(self, product_id: int) -> list[InventoryRecord]:
        """Records of one product in display order (empty if unknown)."""
        records = self._inventory_repo.list_by_product(product_id)
        return sorted(records, key=lambda r: r.format.sort_key)

    # --- Mutations ------------------------------------------------------------

    def restock(self, product_id: int, format_id: int, new_quantity: int) -> InventoryRecord:
        """Set the quantity on hand to *new_quantity*.

        This is an absolute overwrite, not an adjustment: callers that want
        a relative change must read the current quantity first.
        """
        if not isinstance(new_quantity, int) or isinstance(new_quantity, bool):
            raise ValidationError("Restock quantity must be an integer", field="quantity")
        if new_quantity < 0:
            raise ValidationError(
                f"Restock quantity cannot be negative, got {new_quantity}",
                field="quantity",
            )
        fmt = Format.from_id(format_id)

        with self._locked([(product_id, fmt)]):
            record = self._require(product_id, fmt)
            previous = record.quantity
            record.restock(new_quantity)
            self._inventory_repo.save_all([record])

        logger.info("Restocked %s: %d -> %d", record.sku, previous, new_quantity)
        return record

    def reserve(
        self,
        lines: Iterable[OrderLine],
        commit: Callable[[], None] | None = None,
    ) -> list[InventoryRecord]:
        """Take stock for every line as a single all-or-nothing unit.

        Lines for the same (product, format) are summed before the check.
        Uses a two-phase approach under the key locks:
          Phase 1 - load and validate every key; fail before any mutation.
          Phase 2 - withdraw and persist all records in one write.

        *commit* runs while the locks are still held. If it raises, the
        previous quantities are written back and the error propagates.
        """
        requested = requested_quantities(lines)
        if not requested:
            raise ValidationError("Nothing to reserve", field="items")

        with self._locked(list(requested)):
            # Phase 1: load and validate, in the caller's line order
            records: list[InventoryRecord] = []
            for (product_id, fmt), qty in requested.items():
                record = self._require(product_id, fmt)
                if qty > record.quantity:
                    raise InsufficientStockError(
                        product_id=product_id,
                        format=fmt,
                        requested=qty,
                        available=record.quantity,
                    )
                records.append(record)

            # Phase 2: mutate and persist
            previous = [replace(record) for record in records]
            for record in records:
                record.withdraw(requested[record.key])
            self._inventory_repo.save_all(records)

            if commit is not None:
                try:
                    commit()
                except Exception:
                    logger.warning(
                        "Commit failed after reserving %d record(s); restoring stock",
                        len(previous),
                    )
                    self._inventory_repo.save_all(previous)
                    raise

        return records

    def open_records(
        self,
        records: list[InventoryRecord],
        commit: Callable[[], None],
    ) -> None:
        """Write the first records of a newly registered product.

        *commit* persists the owning product. If it fails the records are
        withdrawn again so no half-registered product remains.
        """
        keys = [record.key for record in records]
        with self._locked(keys):
            for record in records:
                if self._inventory_repo.get(record.product_id, record.format) is not None:
                    raise ValidationError(
                        f"Inventory record {record.sku} already exists", field="formats"
                    )
            self._inventory_repo.save_all(records)
            try:
                commit()
            except Exception:
                logger.warning("Registration failed; withdrawing %d record(s)", len(keys))
                self._inventory_repo.remove_all(keys)
                raise

    # --- Internal helpers -----------------------------------------------------

    def _require(self, product_id: int, fmt: Format) -> InventoryRecord:
        record = self._inventory_repo.get(product_id, fmt)
        if record is None:
            raise NotFoundError(
                f"No inventory record for product #{product_id} in {fmt.display_name}"
            )
        return record

    def _lock_for(self, key: InventoryKey) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    @contextmanager
    def _locked(self, keys: list[InventoryKey]) -> Iterator[None]:
        ordered = sorted(set(keys), key=_key_order)
        acquired: list[threading.Lock] = []
        with self._store_lock:
            try:
                for key in ordered:
                    lock = self._lock_for(key)
                    lock.acquire()
                    acquired.append(lock)
                logger.debug("Locked %d inventory key(s)", len(acquired))
                yield
            finally:
                for lock in reversed(acquired):
                    lock.release()
