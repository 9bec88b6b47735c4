"""Concrete repository implementations using SQLModel."""

from .customer import SQLModelCustomerRepository
from .dairy import SQLModelDairyRepository
from .milk_entry import SQLModelMilkEntryRepository
from .rate import SQLModelRateRepository
from .user import SQLModelUserRepository

__all__ = [
    "SQLModelCustomerRepository",
    "SQLModelDairyRepository",
    "SQLModelMilkEntryRepository",
    "SQLModelRateRepository",
    "SQLModelUserRepository",
]
