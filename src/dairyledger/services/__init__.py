"""Service module exports."""

from . import (
    admin_tasks,
    auth,
    customers,
    export_csv,
    milk_entries,
    portal,
    rates,
    reports,
    summary,
    validation,
)

__all__ = [
    "admin_tasks",
    "auth",
    "customers",
    "export_csv",
    "milk_entries",
    "portal",
    "rates",
    "reports",
    "summary",
    "validation",
]
