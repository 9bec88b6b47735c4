"""Milk entry repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from ...models.milk_entry import MilkEntry


class MilkEntryRepository(Protocol):
    """Repository for managing milk collection entries."""

    def get_by_id(self, entry_id: int, *, dairy_id: int) -> Optional[MilkEntry]:
        """Retrieve an entry by ID."""
        ...

    def filter_by_date_range(
        self,
        start_date: date,
        end_date: date,
        *,
        dairy_id: int,
        customer_id: Optional[int] = None,
    ) -> list[MilkEntry]:
        """Get entries collected within an inclusive date range."""
        ...

    def list_by_customer(
        self,
        customer_id: int,
        *,
        dairy_id: int,
        limit: Optional[int] = None,
    ) -> list[MilkEntry]:
        """List a customer's entries, newest collection date first."""
        ...

    def create(self, entry: MilkEntry, *, dairy_id: int) -> MilkEntry:
        """Create a new entry."""
        ...

    def update(self, entry: MilkEntry, *, dairy_id: int) -> MilkEntry:
        """Update an existing entry."""
        ...

    def delete(self, entry_id: int, *, dairy_id: int) -> bool:
        """Delete an entry; return False when nothing matched."""
        ...
