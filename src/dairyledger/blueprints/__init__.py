"""Blueprint exports."""

from . import accounts, dashboard, portal

__all__ = [
    "accounts",
    "dashboard",
    "portal",
]
