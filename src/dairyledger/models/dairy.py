"""Dairy (tenant) definitions."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Dairy(SQLModel, table=True):
    """An isolated dairy business; every customer, rate and entry belongs to one."""

    __tablename__: ClassVar[str] = "dairy"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=128)
    # Not a foreign key: the owner row is created before the dairy during signup.
    owner_id: Optional[int] = Field(default=None, index=True)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)
