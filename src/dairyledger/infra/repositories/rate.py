"""SQLModel implementation of Rate repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import select

from ...models.dairy import utcnow
from ...models.rate import Rate
from ..database import SessionFactory


class SQLModelRateRepository:
    """SQLModel-based rate table repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, rate_id: int, *, dairy_id: int) -> Optional[Rate]:
        """Retrieve a rate by ID."""
        with self.session_factory() as session:
            obj = session.exec(
                select(Rate).where(Rate.id == rate_id, Rate.dairy_id == dairy_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def get_by_pair(self, fat: float, snf: float, *, dairy_id: int) -> Optional[Rate]:
        """Retrieve the rate configured for exactly this FAT/SNF pair."""
        with self.session_factory() as session:
            obj = session.exec(
                select(Rate)
                .where(Rate.dairy_id == dairy_id)
                .where(Rate.fat == fat)
                .where(Rate.snf == snf)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, dairy_id: int) -> list[Rate]:
        """List all rates ordered by ascending FAT, then SNF."""
        with self.session_factory() as session:
            statement = (
                select(Rate)
                .where(Rate.dairy_id == dairy_id)
                .order_by(Rate.fat, Rate.snf, Rate.id)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def upsert(self, rate: Rate, *, dairy_id: int) -> Rate:
        """Insert a rate or overwrite the price of the existing FAT/SNF row.

        The (dairy, fat, snf) triple is the conflict target; the last write wins.
        """
        with self.session_factory() as session:
            existing = session.exec(
                select(Rate)
                .where(Rate.dairy_id == dairy_id)
                .where(Rate.fat == rate.fat)
                .where(Rate.snf == rate.snf)
            ).first()

            target = existing or rate
            if existing:
                existing.rate_per_liter = rate.rate_per_liter
                existing.updated_at = utcnow()
            target.dairy_id = dairy_id
            session.add(target)
            session.commit()
            session.refresh(target)
            session.expunge(target)
            return target

    def delete(self, rate_id: int, *, dairy_id: int) -> bool:
        """Delete a rate by ID; return False when nothing matched."""
        with self.session_factory() as session:
            rate = session.exec(
                select(Rate).where(Rate.id == rate_id, Rate.dairy_id == dairy_id)
            ).first()
            if rate is None:
                return False
            session.delete(rate)
            session.commit()
            return True
