"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Infrastructure failures use a separate hierarchy: they are not the caller's
fault and the operation may simply be retried.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from musicpos.domain.model.format import Format


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Malformed, missing or out-of-range input.

    ``field`` names the offending input (e.g. ``"price"`` or
    ``"items[2].quantity"``) when there is one.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class NotFoundError(DomainException):
    """A referenced product, format, customer, order or inventory pair does not exist."""


class InsufficientStockError(DomainException):
    """Requested quantity exceeds what is on hand for a (product, format) pair."""

    def __init__(
        self,
        product_id: int,
        format: Format,
        requested: int,
        available: int,
    ) -> None:
        super().__init__(
            f"Insufficient stock for product #{product_id} ({format.display_name}): "
            f"requested {requested}, available {available}"
        )
        self.product_id = product_id
        self.format = format
        self.requested = requested
        self.available = available


class InfrastructureError(Exception):
    """Base class for failures outside the domain (safe to retry)."""


class StorageError(InfrastructureError):
    """Persisted state could not be read or written."""


class ConfigurationError(InfrastructureError):
    """Settings file or environment holds an invalid value."""
