"""Customer (milk supplier) definitions."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

from .dairy import utcnow

if TYPE_CHECKING:  # pragma: no cover
    from .milk_entry import MilkEntry

STATUS_ACTIVE = "active"
STATUS_DELETED = "deleted"


class Customer(SQLModel, table=True):
    """A supplier whose milk the dairy collects. Never physically deleted."""

    __tablename__: ClassVar[str] = "customer"

    id: Optional[int] = Field(default=None, primary_key=True)
    dairy_id: int = Field(foreign_key="dairy.id", nullable=False, index=True)
    name: str = Field(nullable=False, index=True, max_length=128)
    phone: Optional[str] = Field(default=None, max_length=32)
    address: Optional[str] = Field(default=None, max_length=255)
    status: str = Field(default=STATUS_ACTIVE, nullable=False, max_length=16, index=True)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)

    entries: list["MilkEntry"] = Relationship(
        back_populates="customer",
        sa_relationship=relationship("MilkEntry", back_populates="customer"),
    )

    @property
    def is_deleted(self) -> bool:
        return self.status == STATUS_DELETED
