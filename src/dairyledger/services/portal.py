"""Customer portal: a customer's own entries and historical totals."""

from __future__ import annotations

from datetime import date
from typing import Optional

from .. import errors
from ..domain.repositories import MilkEntryRepository, UserRepository
from ..errors import AuthorizationError, ValidationError
from ..models.milk_entry import MilkEntry
from ..models.user import User
from . import summary
from .auth import get_profile

DEFAULT_ENTRY_LIMIT = 50
MAX_HISTORY_MONTHS = 120


def _customer_profile(users: UserRepository, user_id: int) -> User:
    user = get_profile(users=users, user_id=user_id)
    if not user.is_customer or user.dairy_id is None:
        raise AuthorizationError("Not a customer account", code=errors.UNAUTHORIZED)
    return user


def list_my_entries(
    *,
    users: UserRepository,
    entries: MilkEntryRepository,
    user_id: int,
    limit: int = DEFAULT_ENTRY_LIMIT,
) -> list[MilkEntry]:
    """Newest entries first."""

    user = _customer_profile(users, user_id)
    return entries.list_by_customer(
        user.customer_id,  # type: ignore[arg-type]
        dairy_id=user.dairy_id,  # type: ignore[arg-type]
        limit=limit,
    )


def monthly_entries(
    *,
    users: UserRepository,
    entries: MilkEntryRepository,
    user_id: int,
    year: int,
    month: int,
) -> list[MilkEntry]:
    user = _customer_profile(users, user_id)
    start, end = summary.month_bounds(year, month)
    return entries.filter_by_date_range(
        start,
        end,
        dairy_id=user.dairy_id,  # type: ignore[arg-type]
        customer_id=user.customer_id,
    )


def monthly_summary(
    *,
    users: UserRepository,
    entries: MilkEntryRepository,
    user_id: int,
    year: int,
    month: int,
) -> summary.DateRangeSummary:
    user = _customer_profile(users, user_id)
    start, end = summary.month_bounds(year, month)
    return summary.date_range_summary(
        repository=entries,
        dairy_id=user.dairy_id,  # type: ignore[arg-type]
        start_date=start,
        end_date=end,
        customer_id=user.customer_id,
    )


def _months_back(today: date, count: int) -> list[tuple[int, int]]:
    months = []
    year, month = today.year, today.month
    for _ in range(count):
        months.append((year, month))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return months


def historical_summaries(
    *,
    users: UserRepository,
    entries: MilkEntryRepository,
    user_id: int,
    months_back: int = 6,
    today: Optional[date] = None,
) -> list[summary.DateRangeSummary]:
    """One summary per calendar month, current month first, at most ten years back."""

    if months_back > MAX_HISTORY_MONTHS:
        raise ValidationError.single(
            "months", errors.INVALID_DATE_RANGE, f"History covers at most {MAX_HISTORY_MONTHS} months"
        )
    user = _customer_profile(users, user_id)
    today = today or date.today()
    results = []
    for year, month in _months_back(today, max(0, months_back)):
        start, end = summary.month_bounds(year, month)
        results.append(
            summary.date_range_summary(
                repository=entries,
                dairy_id=user.dairy_id,  # type: ignore[arg-type]
                start_date=start,
                end_date=end,
                customer_id=user.customer_id,
            )
        )
    return results
