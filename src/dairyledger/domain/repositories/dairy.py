"""Dairy repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.dairy import Dairy


class DairyRepository(Protocol):
    """Repository for dairy tenants."""

    def get_by_id(self, dairy_id: int) -> Optional[Dairy]:
        """Retrieve a dairy by ID."""
        ...

    def create(self, dairy: Dairy) -> Dairy:
        """Create a new dairy."""
        ...
