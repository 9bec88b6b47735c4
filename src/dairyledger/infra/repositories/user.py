"""SQLModel implementation of User repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import select

from ...models.user import User
from ..database import SessionFactory


class SQLModelUserRepository:
    """SQLModel-based user profile repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with self.session_factory() as session:
            obj = session.get(User, user_id)
            if obj:
                session.expunge(obj)
            return obj

    def get_by_email(self, email: str) -> Optional[User]:
        with self.session_factory() as session:
            obj = session.exec(select(User).where(User.email == email)).first()
            if obj:
                session.expunge(obj)
            return obj

    def create(self, user: User) -> User:
        with self.session_factory() as session:
            session.add(user)
            session.commit()
            session.refresh(user)
            session.expunge(user)
            return user

    def update(self, user: User) -> User:
        with self.session_factory() as session:
            user = session.merge(user)
            session.commit()
            session.refresh(user)
            session.expunge(user)
            return user

    def delete(self, user_id: int) -> None:
        with self.session_factory() as session:
            user = session.get(User, user_id)
            if user is not None:
                session.delete(user)
                session.commit()
