"""SQLModel implementation of Customer repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import select

from ...models.customer import STATUS_ACTIVE, STATUS_DELETED, Customer
from ...models.dairy import utcnow
from ..database import SessionFactory


def _escape_like(term: str) -> str:
    """Make LIKE wildcards in a search term match literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SQLModelCustomerRepository:
    """SQLModel-based customer repository implementation.

    Soft-deleted customers are invisible to every read.
    """

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def _active(self, dairy_id: int):
        return (
            select(Customer)
            .where(Customer.dairy_id == dairy_id)
            .where(Customer.status == STATUS_ACTIVE)
        )

    def get_by_id(self, customer_id: int, *, dairy_id: int) -> Optional[Customer]:
        """Retrieve an active customer by ID."""
        with self.session_factory() as session:
            obj = session.exec(self._active(dairy_id).where(Customer.id == customer_id)).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(
        self,
        *,
        dairy_id: int,
        search: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Customer]:
        """List active customers ordered by name, optionally filtered by name."""
        with self.session_factory() as session:
            statement = self._active(dairy_id)
            if search:
                statement = statement.where(
                    Customer.name.ilike(f"%{_escape_like(search)}%", escape="\\")  # type: ignore
                )
            statement = statement.order_by(Customer.name, Customer.id)  # type: ignore
            if offset:
                statement = statement.offset(offset)
            if limit:
                statement = statement.limit(limit)
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, customer: Customer, *, dairy_id: int) -> Customer:
        """Create a new customer."""
        with self.session_factory() as session:
            customer.dairy_id = dairy_id
            customer.status = STATUS_ACTIVE
            session.add(customer)
            session.commit()
            session.refresh(customer)
            session.expunge(customer)
            return customer

    def update(self, customer: Customer, *, dairy_id: int) -> Customer:
        """Update an existing customer."""
        with self.session_factory() as session:
            customer.dairy_id = dairy_id
            customer.updated_at = utcnow()
            customer = session.merge(customer)
            session.commit()
            session.refresh(customer)
            session.expunge(customer)
            return customer

    def soft_delete(self, customer_id: int, *, dairy_id: int) -> bool:
        """Flag a customer as deleted; return False when no active row matched."""
        with self.session_factory() as session:
            customer = session.exec(
                self._active(dairy_id).where(Customer.id == customer_id)
            ).first()
            if customer is None:
                return False
            customer.status = STATUS_DELETED
            customer.updated_at = utcnow()
            session.add(customer)
            session.commit()
            return True
