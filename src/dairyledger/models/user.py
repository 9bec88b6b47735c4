"""User profile model mapping a principal to a dairy and optional customer."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

from .dairy import utcnow

ROLE_OWNER = "owner"
ROLE_CUSTOMER = "customer"
ROLES = frozenset({ROLE_OWNER, ROLE_CUSTOMER})


class User(SQLModel, table=True):
    """Application user with role and credentials."""

    __tablename__: ClassVar[str] = "user"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(nullable=False, unique=True, index=True, max_length=255)
    password_hash: str = Field(nullable=False, max_length=255)
    role: str = Field(default=ROLE_OWNER, nullable=False, max_length=16, index=True)
    dairy_id: Optional[int] = Field(default=None, foreign_key="dairy.id", index=True)
    customer_id: Optional[int] = Field(default=None, foreign_key="customer.id")
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    last_login: Optional[datetime] = Field(default=None)

    @property
    def is_customer(self) -> bool:
        return self.role == ROLE_CUSTOMER and self.customer_id is not None
