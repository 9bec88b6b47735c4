"""Customer repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.customer import Customer


class CustomerRepository(Protocol):
    """Repository for managing customer entities.

    Every read excludes soft-deleted customers.
    """

    def get_by_id(self, customer_id: int, *, dairy_id: int) -> Optional[Customer]:
        """Retrieve an active customer by ID."""
        ...

    def list_all(
        self,
        *,
        dairy_id: int,
        search: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Customer]:
        """List active customers ordered by name, optionally filtered by name."""
        ...

    def create(self, customer: Customer, *, dairy_id: int) -> Customer:
        """Create a new customer."""
        ...

    def update(self, customer: Customer, *, dairy_id: int) -> Customer:
        """Update an existing customer."""
        ...

    def soft_delete(self, customer_id: int, *, dairy_id: int) -> bool:
        """Flag a customer as deleted; return False when no active row matched."""
        ...
