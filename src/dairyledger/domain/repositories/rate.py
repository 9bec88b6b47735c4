"""Rate repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.rate import Rate


class RateRepository(Protocol):
    """Repository for a dairy's rate table."""

    def get_by_id(self, rate_id: int, *, dairy_id: int) -> Optional[Rate]:
        """Retrieve a rate by ID."""
        ...

    def get_by_pair(self, fat: float, snf: float, *, dairy_id: int) -> Optional[Rate]:
        """Retrieve the rate configured for exactly this FAT/SNF pair."""
        ...

    def list_all(self, *, dairy_id: int) -> list[Rate]:
        """List all rates ordered by ascending FAT, then SNF."""
        ...

    def upsert(self, rate: Rate, *, dairy_id: int) -> Rate:
        """Insert a rate or overwrite the price of the existing FAT/SNF row."""
        ...

    def delete(self, rate_id: int, *, dairy_id: int) -> bool:
        """Delete a rate by ID; return False when nothing matched."""
        ...
