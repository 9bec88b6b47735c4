"""SQLModel implementation of MilkEntry repository."""

from __future__ import annotations

from datetime import date
from typing import Optional

from sqlmodel import select

from ...models.dairy import utcnow
from ...models.milk_entry import MilkEntry
from ..database import SessionFactory


class SQLModelMilkEntryRepository:
    """SQLModel-based milk entry repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, entry_id: int, *, dairy_id: int) -> Optional[MilkEntry]:
        """Retrieve an entry by ID."""
        with self.session_factory() as session:
            obj = session.exec(
                select(MilkEntry)
                .where(MilkEntry.id == entry_id)
                .where(MilkEntry.dairy_id == dairy_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def filter_by_date_range(
        self,
        start_date: date,
        end_date: date,
        *,
        dairy_id: int,
        customer_id: Optional[int] = None,
    ) -> list[MilkEntry]:
        """Get entries collected within an inclusive date range."""
        with self.session_factory() as session:
            statement = (
                select(MilkEntry)
                .where(MilkEntry.dairy_id == dairy_id)
                .where(MilkEntry.collected_on >= start_date)
                .where(MilkEntry.collected_on <= end_date)
            )
            if customer_id is not None:
                statement = statement.where(MilkEntry.customer_id == customer_id)
            statement = statement.order_by(
                MilkEntry.collected_on.desc(), MilkEntry.created_at.desc()  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_by_customer(
        self,
        customer_id: int,
        *,
        dairy_id: int,
        limit: Optional[int] = None,
    ) -> list[MilkEntry]:
        """List a customer's entries, newest collection date first."""
        with self.session_factory() as session:
            statement = (
                select(MilkEntry)
                .where(MilkEntry.dairy_id == dairy_id)
                .where(MilkEntry.customer_id == customer_id)
                .order_by(MilkEntry.collected_on.desc(), MilkEntry.id.desc())  # type: ignore
            )
            if limit:
                statement = statement.limit(limit)
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, entry: MilkEntry, *, dairy_id: int) -> MilkEntry:
        """Create a new entry."""
        with self.session_factory() as session:
            entry.dairy_id = dairy_id
            session.add(entry)
            session.commit()
            session.refresh(entry)
            session.expunge(entry)
            return entry

    def update(self, entry: MilkEntry, *, dairy_id: int) -> MilkEntry:
        """Update an existing entry."""
        with self.session_factory() as session:
            entry.dairy_id = dairy_id
            entry.updated_at = utcnow()
            entry = session.merge(entry)
            session.commit()
            session.refresh(entry)
            session.expunge(entry)
            return entry

    def delete(self, entry_id: int, *, dairy_id: int) -> bool:
        """Delete an entry; return False when nothing matched."""
        with self.session_factory() as session:
            entry = session.exec(
                select(MilkEntry)
                .where(MilkEntry.id == entry_id)
                .where(MilkEntry.dairy_id == dairy_id)
            ).first()
            if entry is None:
                return False
            session.delete(entry)
            session.commit()
            return True
