"""Input validation for milk entries, rates and customers.

Validators never raise; they return every ``FieldError`` they find so the
caller can report all problems at once. Services wrap a non-empty list in a
``ValidationError``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Mapping, Optional

from .. import errors
from ..errors import FieldError
from ..models.milk_entry import SHIFTS

FAT_RANGE = (0.0, 15.0)
SNF_RANGE = (0.0, 15.0)

_LABELS = {
    "fat": "FAT",
    "snf": "SNF",
    "liters": "Liters",
    "rate_per_liter": "Rate per liter",
}


@dataclass(slots=True)
class EntryInput:
    """Typed values produced by a successful ``validate_milk_entry``."""

    customer_id: int
    collected_on: date
    fat: float
    snf: float
    liters: float
    shift: str


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_number(value: Any) -> Optional[float]:
    """Return ``value`` as a finite float, or None when it is not a number."""

    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def parse_date(value: Any) -> Optional[date]:
    """Accept a ``date`` or an ISO ``YYYY-MM-DD`` string."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def _check_number(
    found: list[FieldError],
    data: Mapping[str, Any],
    field: str,
    *,
    low: float,
    high: Optional[float],
    range_code: str,
) -> Optional[float]:
    label = _LABELS[field]
    raw = data.get(field)
    if _is_blank(raw):
        found.append(FieldError(field, errors.REQUIRED, f"{label} is required"))
        return None
    number = parse_number(raw)
    if number is None:
        found.append(FieldError(field, errors.INVALID_TYPE, f"{label} must be a number"))
        return None
    if high is None:
        if number <= low:
            found.append(FieldError(field, range_code, f"{label} must be greater than {low:g}"))
            return None
    elif number < low or number > high:
        found.append(
            FieldError(field, range_code, f"{label} must be between {low:g} and {high:g}")
        )
        return None
    return number


def _check_fat_snf(found: list[FieldError], data: Mapping[str, Any]) -> tuple[Optional[float], Optional[float]]:
    fat = _check_number(
        found, data, "fat", low=FAT_RANGE[0], high=FAT_RANGE[1], range_code=errors.INVALID_FAT
    )
    snf = _check_number(
        found, data, "snf", low=SNF_RANGE[0], high=SNF_RANGE[1], range_code=errors.INVALID_SNF
    )
    return fat, snf


def validate_milk_entry(data: Mapping[str, Any]) -> tuple[Any, list[FieldError]]:
    """Validate milk entry input.

    FAT and SNF must lie in [0, 15], liters must be positive, and customer,
    date and shift are required. Returns ``(EntryInput, [])`` on success and
    ``(None, errors)`` otherwise.
    """

    found: list[FieldError] = []
    fat, snf = _check_fat_snf(found, data)
    liters = _check_number(
        found, data, "liters", low=0.0, high=None, range_code=errors.INVALID_LITERS
    )

    customer_id: Optional[int] = None
    raw_customer = data.get("customer_id")
    if _is_blank(raw_customer):
        found.append(FieldError("customer_id", errors.REQUIRED, "Customer is required"))
    else:
        try:
            customer_id = int(raw_customer)
        except (TypeError, ValueError):
            found.append(
                FieldError("customer_id", errors.INVALID_TYPE, "Customer must be an identifier")
            )

    collected_on: Optional[date] = None
    raw_date = data.get("date")
    if _is_blank(raw_date):
        found.append(FieldError("date", errors.REQUIRED, "Date is required"))
    else:
        collected_on = parse_date(raw_date)
        if collected_on is None:
            found.append(
                FieldError("date", errors.INVALID_DATE, "Enter a valid date (YYYY-MM-DD)")
            )

    raw_shift = data.get("shift")
    if _is_blank(raw_shift):
        shift = SHIFTS[0]
    else:
        shift = raw_shift.strip().lower() if isinstance(raw_shift, str) else ""
    if shift not in SHIFTS:
        found.append(
            FieldError("shift", errors.INVALID_SHIFT, f"Shift must be one of: {', '.join(SHIFTS)}")
        )

    if found:
        return None, found
    return (
        EntryInput(
            customer_id=customer_id,  # type: ignore[arg-type]
            collected_on=collected_on,  # type: ignore[arg-type]
            fat=fat,  # type: ignore[arg-type]
            snf=snf,  # type: ignore[arg-type]
            liters=liters,  # type: ignore[arg-type]
            shift=shift,
        ),
        [],
    )


def validate_fat_snf(data: Mapping[str, Any]) -> tuple[Optional[tuple[float, float]], list[FieldError]]:
    """Validate a bare FAT/SNF pair, as used for rate lookups."""

    found: list[FieldError] = []
    fat, snf = _check_fat_snf(found, data)
    if found:
        return None, found
    return (fat, snf), []  # type: ignore[return-value]


def validate_rate(data: Mapping[str, Any]) -> tuple[Optional[tuple[float, float, float]], list[FieldError]]:
    """Validate a rate table row: FAT/SNF ranges and a positive price."""

    found: list[FieldError] = []
    fat, snf = _check_fat_snf(found, data)
    price = _check_number(
        found, data, "rate_per_liter", low=0.0, high=None, range_code=errors.INVALID_RATE
    )
    if found:
        return None, found
    return (fat, snf, price), []  # type: ignore[return-value]


def validate_customer_name(name: Any) -> list[FieldError]:
    """Customer names are required and must not be blank."""

    if _is_blank(name) or not isinstance(name, str):
        return [FieldError("name", errors.INVALID_CUSTOMER_NAME, "Customer name is required")]
    if len(name.strip()) > 128:
        return [
            FieldError(
                "name", errors.INVALID_CUSTOMER_NAME, "Customer name must be 128 characters or fewer"
            )
        ]
    return []
