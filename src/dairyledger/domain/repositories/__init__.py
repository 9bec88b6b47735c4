"""Repository protocol definitions for domain layer."""

from .customer import CustomerRepository
from .dairy import DairyRepository
from .milk_entry import MilkEntryRepository
from .rate import RateRepository
from .user import UserRepository

__all__ = [
    "CustomerRepository",
    "DairyRepository",
    "MilkEntryRepository",
    "RateRepository",
    "UserRepository",
]
