"""SQLModel definitions for milk collection entries."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

from .dairy import utcnow

if TYPE_CHECKING:  # pragma: no cover - import guard for circular dependency
    from .customer import Customer

SHIFT_MORNING = "morning"
SHIFT_EVENING = "evening"
SHIFTS = (SHIFT_MORNING, SHIFT_EVENING)


class MilkEntry(SQLModel, table=True):
    """One milk collection from a customer on a date and shift."""

    __tablename__: ClassVar[str] = "milk_entry"

    id: Optional[int] = Field(default=None, primary_key=True)
    dairy_id: int = Field(foreign_key="dairy.id", nullable=False, index=True)
    customer_id: int = Field(foreign_key="customer.id", nullable=False, index=True)
    collected_on: date = Field(nullable=False, index=True)
    shift: str = Field(default=SHIFT_MORNING, nullable=False, max_length=16)
    fat: float = Field(nullable=False)
    snf: float = Field(nullable=False)
    liters: float = Field(nullable=False)
    rate_per_liter: float = Field(nullable=False, description="Rate resolved when the amount was computed")
    amount: float = Field(nullable=False, description="Frozen at write time; not recomputed on rate changes")
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)

    customer: "Customer" = Relationship(
        back_populates="entries",
        sa_relationship=relationship("Customer", back_populates="entries"),
    )
