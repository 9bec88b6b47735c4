"""SQLModel implementation of Dairy repository."""

from __future__ import annotations

from typing import Optional

from ...models.dairy import Dairy
from ..database import SessionFactory


class SQLModelDairyRepository:
    """SQLModel-based dairy repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get_by_id(self, dairy_id: int) -> Optional[Dairy]:
        with self.session_factory() as session:
            obj = session.get(Dairy, dairy_id)
            if obj:
                session.expunge(obj)
            return obj

    def create(self, dairy: Dairy) -> Dairy:
        with self.session_factory() as session:
            session.add(dairy)
            session.commit()
            session.refresh(dairy)
            session.expunge(dairy)
            return dairy
