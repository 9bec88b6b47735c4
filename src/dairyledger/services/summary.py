"""Collection summaries bucketed by day, week, month or an arbitrary range."""

from __future__ import annotations

from calendar import monthrange
from dataclasses import asdict, dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from .. import errors
from ..domain.repositories.milk_entry import MilkEntryRepository
from ..errors import ValidationError
from ..models.milk_entry import MilkEntry

WEEK_DAYS = 7


@dataclass(slots=True)
class DailySummary:
    date: date
    total_liters: float = 0.0
    total_amount: float = 0.0
    entry_count: int = 0

    def to_dict(self) -> dict[str, object]:
        payload = asdict(self)
        payload["date"] = self.date.isoformat()
        return payload


@dataclass(slots=True)
class WeeklySummary:
    start_date: date
    end_date: date
    total_liters: float
    total_amount: float
    entry_count: int
    daily_breakdown: list[DailySummary] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "total_liters": self.total_liters,
            "total_amount": self.total_amount,
            "entry_count": self.entry_count,
            "daily_breakdown": [day.to_dict() for day in self.daily_breakdown],
        }


@dataclass(slots=True)
class MonthlySummary:
    year: int
    month: int
    total_liters: float
    total_amount: float
    entry_count: int
    weekly_breakdown: list[WeeklySummary] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "year": self.year,
            "month": self.month,
            "total_liters": self.total_liters,
            "total_amount": self.total_amount,
            "entry_count": self.entry_count,
            "weekly_breakdown": [week.to_dict() for week in self.weekly_breakdown],
        }


@dataclass(slots=True)
class DateRangeSummary:
    start_date: date
    end_date: date
    total_liters: float
    total_amount: float
    entry_count: int

    def to_dict(self) -> dict[str, object]:
        payload = asdict(self)
        payload["start_date"] = self.start_date.isoformat()
        payload["end_date"] = self.end_date.isoformat()
        return payload


class _Totals:
    """Running decimal sums so float noise never leaks into reported totals."""

    __slots__ = ("liters", "amount", "count")

    def __init__(self) -> None:
        self.liters = Decimal(0)
        self.amount = Decimal(0)
        self.count = 0

    def add(self, entry: MilkEntry) -> None:
        self.liters += Decimal(str(entry.liters))
        self.amount += Decimal(str(entry.amount))
        self.count += 1

    def merge(self, other: _Totals) -> None:
        self.liters += other.liters
        self.amount += other.amount
        self.count += other.count


def _bucket_by_day(entries: Iterable[MilkEntry]) -> dict[date, _Totals]:
    buckets: dict[date, _Totals] = {}
    for entry in entries:
        buckets.setdefault(entry.collected_on, _Totals()).add(entry)
    return buckets


def _daily(day: date, buckets: dict[date, _Totals]) -> DailySummary:
    totals = buckets.get(day)
    if totals is None:
        return DailySummary(date=day)
    return DailySummary(
        date=day,
        total_liters=float(totals.liters),
        total_amount=float(totals.amount),
        entry_count=totals.count,
    )


def _days(start: date, end: date) -> list[date]:
    return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]


def _week(start: date, end: date, buckets: dict[date, _Totals]) -> WeeklySummary:
    breakdown = [_daily(day, buckets) for day in _days(start, end)]
    totals = _Totals()
    for day in _days(start, end):
        if day in buckets:
            totals.merge(buckets[day])
    return WeeklySummary(
        start_date=start,
        end_date=end,
        total_liters=float(totals.liters),
        total_amount=float(totals.amount),
        entry_count=totals.count,
        daily_breakdown=breakdown,
    )


def _fetch(
    repository: MilkEntryRepository,
    start: date,
    end: date,
    *,
    dairy_id: int,
    customer_id: Optional[int],
) -> list[MilkEntry]:
    return repository.filter_by_date_range(start, end, dairy_id=dairy_id, customer_id=customer_id)


def daily_summary(
    *,
    repository: MilkEntryRepository,
    dairy_id: int,
    day: date,
    customer_id: Optional[int] = None,
) -> DailySummary:
    """Totals for entries collected on ``day``."""

    entries = _fetch(repository, day, day, dairy_id=dairy_id, customer_id=customer_id)
    return _daily(day, _bucket_by_day(entries))


def weekly_summary(
    *,
    repository: MilkEntryRepository,
    dairy_id: int,
    start_date: date,
    customer_id: Optional[int] = None,
) -> WeeklySummary:
    """Totals for the seven days starting at ``start_date``.

    The breakdown always has seven rows in date order; days without entries
    report zero totals.
    """

    end_date = start_date + timedelta(days=WEEK_DAYS - 1)
    entries = _fetch(repository, start_date, end_date, dairy_id=dairy_id, customer_id=customer_id)
    return _week(start_date, end_date, _bucket_by_day(entries))


def monthly_summary(
    *,
    repository: MilkEntryRepository,
    dairy_id: int,
    year: int,
    month: int,
    customer_id: Optional[int] = None,
) -> MonthlySummary:
    """Totals for a calendar month split into 7-day weeks from the 1st.

    The last week is cut at the month end, so its breakdown may hold fewer
    than seven days.
    """

    first, last = month_bounds(year, month)
    entries = _fetch(repository, first, last, dairy_id=dairy_id, customer_id=customer_id)
    buckets = _bucket_by_day(entries)

    weeks: list[WeeklySummary] = []
    week_start = first
    while week_start <= last:
        week_end = min(week_start + timedelta(days=WEEK_DAYS - 1), last)
        weeks.append(_week(week_start, week_end, buckets))
        week_start += timedelta(days=WEEK_DAYS)

    totals = _Totals()
    for bucket in buckets.values():
        totals.merge(bucket)
    return MonthlySummary(
        year=year,
        month=month,
        total_liters=float(totals.liters),
        total_amount=float(totals.amount),
        entry_count=totals.count,
        weekly_breakdown=weeks,
    )


def date_range_summary(
    *,
    repository: MilkEntryRepository,
    dairy_id: int,
    start_date: date,
    end_date: date,
    customer_id: Optional[int] = None,
) -> DateRangeSummary:
    """Totals only, over the inclusive range [start_date, end_date]."""

    if start_date > end_date:
        raise ValidationError.single(
            "date_range", errors.INVALID_DATE_RANGE, "Start date must not be after end date"
        )
    totals = _Totals()
    for entry in _fetch(repository, start_date, end_date, dairy_id=dairy_id, customer_id=customer_id):
        totals.add(entry)
    return DateRangeSummary(
        start_date=start_date,
        end_date=end_date,
        total_liters=float(totals.liters),
        total_amount=float(totals.amount),
        entry_count=totals.count,
    )


def range_breakdown(
    *,
    repository: MilkEntryRepository,
    dairy_id: int,
    start_date: date,
    end_date: date,
    customer_id: Optional[int] = None,
) -> WeeklySummary:
    """Per-day totals over any inclusive range, one row per day, in the weekly shape."""

    if start_date > end_date:
        raise ValidationError.single(
            "date_range", errors.INVALID_DATE_RANGE, "Start date must not be after end date"
        )
    entries = _fetch(repository, start_date, end_date, dairy_id=dairy_id, customer_id=customer_id)
    return _week(start_date, end_date, _bucket_by_day(entries))


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of a month."""

    if not date.min.year <= year <= date.max.year:
        raise ValidationError.single(
            "year", errors.INVALID_DATE, f"Year must be between {date.min.year} and {date.max.year}"
        )
    if not 1 <= month <= 12:
        raise ValidationError.single("month", errors.INVALID_DATE, "Month must be between 1 and 12")
    return date(year, month, 1), date(year, month, monthrange(year, month)[1])
