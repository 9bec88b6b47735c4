"""Milk entry recording: validation, rate resolution, pricing and persistence."""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from .. import errors
from ..domain.repositories import CustomerRepository, MilkEntryRepository, RateRepository
from ..errors import NoRateConfiguredError, NotFoundError, ValidationError
from ..logging_config import get_logger
from ..models.milk_entry import SHIFT_MORNING, MilkEntry
from .rates import RateResolution, calculate_amount, resolve_rate
from .validation import EntryInput, validate_milk_entry

logger = get_logger("services.milk_entries")


def _price(
    rates: RateRepository, *, dairy_id: int, values: EntryInput
) -> tuple[RateResolution, float]:
    resolution = resolve_rate(repository=rates, dairy_id=dairy_id, fat=values.fat, snf=values.snf)
    if resolution is None:
        logger.warning(
            "No rate configured",
            extra={"dairy_id": dairy_id, "fat": values.fat, "snf": values.snf},
        )
        raise NoRateConfiguredError(values.fat, values.snf)
    return resolution, calculate_amount(resolution.rate_per_liter, values.liters)


def _require_customer(customers: CustomerRepository, *, dairy_id: int, customer_id: int) -> None:
    if customers.get_by_id(customer_id, dairy_id=dairy_id) is None:
        raise NotFoundError("Customer", customer_id, code=errors.CUSTOMER_NOT_FOUND)


def record_entry(
    *,
    entries: MilkEntryRepository,
    rates: RateRepository,
    customers: CustomerRepository,
    dairy_id: int,
    customer_id: Any,
    entry_date: Any,
    fat: Any,
    snf: Any,
    liters: Any,
    shift: Any = SHIFT_MORNING,
) -> MilkEntry:
    """Validate, price and persist one milk collection.

    Raises ``ValidationError`` for malformed input, ``NotFoundError`` for an
    unknown or deleted customer and ``NoRateConfiguredError`` when the dairy
    has no rates. Nothing is written unless every check passes.
    """

    values, problems = validate_milk_entry(
        {
            "customer_id": customer_id,
            "date": entry_date,
            "fat": fat,
            "snf": snf,
            "liters": liters,
            "shift": shift,
        }
    )
    if problems:
        raise ValidationError(problems)

    _require_customer(customers, dairy_id=dairy_id, customer_id=values.customer_id)
    resolution, amount = _price(rates, dairy_id=dairy_id, values=values)

    entry = entries.create(
        MilkEntry(
            dairy_id=dairy_id,
            customer_id=values.customer_id,
            collected_on=values.collected_on,
            shift=values.shift,
            fat=values.fat,
            snf=values.snf,
            liters=values.liters,
            rate_per_liter=resolution.rate_per_liter,
            amount=amount,
        ),
        dairy_id=dairy_id,
    )
    logger.info(
        "Milk entry recorded",
        extra={
            "dairy_id": dairy_id,
            "entry_id": entry.id,
            "customer_id": entry.customer_id,
            "amount": entry.amount,
            "exact_rate": resolution.is_exact,
        },
    )
    return entry


def get_entry(*, entries: MilkEntryRepository, dairy_id: int, entry_id: int) -> MilkEntry:
    entry = entries.get_by_id(entry_id, dairy_id=dairy_id)
    if entry is None:
        raise NotFoundError("Milk entry", entry_id, code=errors.ENTRY_NOT_FOUND)
    return entry


def update_entry(
    *,
    entries: MilkEntryRepository,
    rates: RateRepository,
    dairy_id: int,
    entry_id: int,
    fat: Any = None,
    snf: Any = None,
    liters: Any = None,
    shift: Any = None,
    entry_date: Any = None,
) -> MilkEntry:
    """Patch an entry and reprice it from the current rate table.

    The amount is always recomputed from the merged FAT/SNF/liters, even when
    only one of them changed. If the dairy no longer has any rate the update
    fails instead of keeping the old amount.
    """

    existing = get_entry(entries=entries, dairy_id=dairy_id, entry_id=entry_id)
    merged = {
        "customer_id": existing.customer_id,
        "date": existing.collected_on if entry_date is None else entry_date,
        "fat": existing.fat if fat is None else fat,
        "snf": existing.snf if snf is None else snf,
        "liters": existing.liters if liters is None else liters,
        "shift": existing.shift if shift is None else shift,
    }
    values, problems = validate_milk_entry(merged)
    if problems:
        raise ValidationError(problems)

    resolution, amount = _price(rates, dairy_id=dairy_id, values=values)

    existing.collected_on = values.collected_on
    existing.shift = values.shift
    existing.fat = values.fat
    existing.snf = values.snf
    existing.liters = values.liters
    existing.rate_per_liter = resolution.rate_per_liter
    existing.amount = amount
    updated = entries.update(existing, dairy_id=dairy_id)
    logger.info(
        "Milk entry updated",
        extra={"dairy_id": dairy_id, "entry_id": entry_id, "amount": updated.amount},
    )
    return updated


def delete_entry(*, entries: MilkEntryRepository, dairy_id: int, entry_id: int) -> None:
    if not entries.delete(entry_id, dairy_id=dairy_id):
        raise NotFoundError("Milk entry", entry_id, code=errors.ENTRY_NOT_FOUND)
    logger.info("Milk entry deleted", extra={"dairy_id": dairy_id, "entry_id": entry_id})


def list_by_date(*, entries: MilkEntryRepository, dairy_id: int, day: date) -> list[MilkEntry]:
    """Entries collected on ``day``, most recently created first."""

    return entries.filter_by_date_range(day, day, dairy_id=dairy_id)


def list_by_customer(
    *,
    entries: MilkEntryRepository,
    dairy_id: int,
    customer_id: int,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> list[MilkEntry]:
    """A customer's entries, newest first, optionally within an inclusive range."""

    if start_date is None and end_date is None:
        return entries.list_by_customer(customer_id, dairy_id=dairy_id)
    if start_date is None or end_date is None:
        raise ValidationError.single(
            "date_range", errors.INVALID_DATE_RANGE, "Both start and end dates are required"
        )
    if start_date > end_date:
        raise ValidationError.single(
            "date_range", errors.INVALID_DATE_RANGE, "Start date must not be after end date"
        )
    return entries.filter_by_date_range(
        start_date, end_date, dairy_id=dairy_id, customer_id=customer_id
    )
