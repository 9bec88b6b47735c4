"""SQLModel table exports."""

from .customer import Customer
from .dairy import Dairy
from .milk_entry import MilkEntry
from .rate import Rate
from .user import User

__all__ = [
    "Customer",
    "Dairy",
    "MilkEntry",
    "Rate",
    "User",
]
