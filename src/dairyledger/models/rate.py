"""Rate table rows: price per liter for a FAT/SNF pair."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from .dairy import utcnow


class Rate(SQLModel, table=True):
    """Price per liter the dairy pays for milk of a given FAT and SNF."""

    __tablename__: ClassVar[str] = "rate"
    __table_args__ = (UniqueConstraint("dairy_id", "fat", "snf", name="uq_rate_dairy_fat_snf"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    dairy_id: int = Field(foreign_key="dairy.id", nullable=False, index=True)
    fat: float = Field(nullable=False)
    snf: float = Field(nullable=False)
    rate_per_liter: float = Field(nullable=False)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)
