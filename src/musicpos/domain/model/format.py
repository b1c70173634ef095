"""Physical formats a product can be stocked in.

The identifiers are persisted and shared with historical data, so they
must never be renumbered.
"""

from __future__ import annotations

from enum import Enum

from musicpos.domain.exceptions import NotFoundError


class Format(Enum):
    VINYL = 1
    CD = 2
    CASSETTE = 3

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def sku_prefix(self) -> str:
        return _SKU_PREFIXES[self]

    @property
    def sort_key(self) -> int:
        """Position in the fixed display order: Vinyl, CD, Cassette."""
        return DISPLAY_ORDER.index(self)

    @staticmethod
    def from_id(format_id: int) -> Format:
        try:
            return Format(format_id)
        except ValueError:
            raise NotFoundError(f"Format with ID '{format_id}' not found") from None

    @staticmethod
    def from_name(name: str) -> Format:
        """Resolve 'vinyl', 'CD', 'Cassette' (any case) to a Format."""
        for fmt in Format:
            if fmt.display_name.lower() == name.strip().lower():
                return fmt
        raise NotFoundError(f"Format '{name}' not found")


_DISPLAY_NAMES = {
    Format.VINYL: "Vinyl",
    Format.CD: "CD",
    Format.CASSETTE: "Cassette",
}

_SKU_PREFIXES = {
    Format.VINYL: "VIN",
    Format.CD: "CD",
    Format.CASSETTE: "CAS",
}

DISPLAY_ORDER = (Format.VINYL, Format.CD, Format.CASSETTE)
