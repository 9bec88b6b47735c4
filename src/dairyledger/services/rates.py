"""Rate table services: lookup with nearest-rate fallback and amount pricing."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Optional

from .. import errors
from ..domain.repositories.rate import RateRepository
from ..errors import NotFoundError, ValidationError
from ..logging_config import get_logger
from ..models.rate import Rate
from .validation import validate_rate

logger = get_logger("services.rates")

CENT = Decimal("0.01")


@dataclass(slots=True)
class RateResolution:
    """The rate chosen for a requested FAT/SNF pair."""

    rate_per_liter: float
    is_exact: bool
    fat: float
    snf: float
    distance: float


def _dec(value: float) -> Decimal:
    # str() keeps the short repr, so 3.8 becomes Decimal("3.8") rather than its binary expansion
    return Decimal(str(value))


def rate_distance(rate: Rate, *, fat: float, snf: float) -> Decimal:
    """Manhattan distance between a configured rate and the requested pair."""

    return abs(_dec(rate.fat) - _dec(fat)) + abs(_dec(rate.snf) - _dec(snf))


def nearest_rate(rates: Iterable[Rate], *, fat: float, snf: float) -> Optional[RateResolution]:
    """Pick the configured rate closest to (fat, snf).

    ``rates`` are scanned in ascending (fat, snf) order and a later rate only
    replaces the current best when strictly closer, so ties go to the lowest
    (fat, snf). Returns None when there are no rates at all.
    """

    best: Optional[Rate] = None
    best_distance: Optional[Decimal] = None
    for rate in sorted(rates, key=lambda r: (r.fat, r.snf)):
        distance = rate_distance(rate, fat=fat, snf=snf)
        if best_distance is None or distance < best_distance:
            best, best_distance = rate, distance
            if distance == 0:
                break

    if best is None or best_distance is None:
        return None
    return RateResolution(
        rate_per_liter=best.rate_per_liter,
        is_exact=best_distance == 0,
        fat=best.fat,
        snf=best.snf,
        distance=float(best_distance),
    )


def resolve_rate(
    *, repository: RateRepository, dairy_id: int, fat: float, snf: float
) -> Optional[RateResolution]:
    """Return the exact rate for (fat, snf), else the nearest configured one."""

    exact = repository.get_by_pair(fat, snf, dairy_id=dairy_id)
    if exact is not None:
        return RateResolution(
            rate_per_liter=exact.rate_per_liter,
            is_exact=True,
            fat=exact.fat,
            snf=exact.snf,
            distance=0.0,
        )

    resolution = nearest_rate(repository.list_all(dairy_id=dairy_id), fat=fat, snf=snf)
    if resolution is not None:
        logger.info(
            "Using nearest rate",
            extra={
                "dairy_id": dairy_id,
                "requested": (fat, snf),
                "resolved": (resolution.fat, resolution.snf),
                "distance": resolution.distance,
            },
        )
    return resolution


def calculate_amount(rate_per_liter: float, liters: float) -> float:
    """Price ``liters`` at ``rate_per_liter``, rounded half away from zero to the cent.

    >>> calculate_amount(45.00, 10.555)
    474.98
    """

    amount = (_dec(rate_per_liter) * _dec(liters)).quantize(CENT, rounding=ROUND_HALF_UP)
    return float(amount)


def set_rate(
    *,
    repository: RateRepository,
    dairy_id: int,
    fat: Any,
    snf: Any,
    rate_per_liter: Any,
) -> Rate:
    """Create or overwrite the rate for a FAT/SNF pair."""

    values, problems = validate_rate({"fat": fat, "snf": snf, "rate_per_liter": rate_per_liter})
    if problems:
        raise ValidationError(problems)
    fat_value, snf_value, price = values  # type: ignore[misc]
    rate = repository.upsert(
        Rate(dairy_id=dairy_id, fat=fat_value, snf=snf_value, rate_per_liter=price),
        dairy_id=dairy_id,
    )
    logger.info(
        "Rate saved",
        extra={"dairy_id": dairy_id, "fat": fat_value, "snf": snf_value, "rate_per_liter": price},
    )
    return rate


def list_rates(*, repository: RateRepository, dairy_id: int) -> list[Rate]:
    """Return the rate table ordered by FAT, then SNF."""

    return repository.list_all(dairy_id=dairy_id)


def delete_rate(*, repository: RateRepository, dairy_id: int, rate_id: int) -> None:
    """Remove one rate row."""

    if not repository.delete(rate_id, dairy_id=dairy_id):
        raise NotFoundError("Rate", rate_id, code=errors.RATE_NOT_FOUND)
    logger.info("Rate deleted", extra={"dairy_id": dairy_id, "rate_id": rate_id})
