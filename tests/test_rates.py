"""Rate resolution and pricing tests."""

from __future__ import annotations

import pytest

from dairyledger import errors
from dairyledger.errors import NotFoundError, ValidationError
from dairyledger.models import Rate
from dairyledger.services import rates


def _rate(fat: float, snf: float, price: float) -> Rate:
    return Rate(dairy_id=1, fat=fat, snf=snf, rate_per_liter=price)


def test_calculate_amount_rounds_half_up():
    """45.00 x 10.555 = 474.975 rounds up, not to even."""
    assert rates.calculate_amount(45.00, 10.555) == 474.98
    assert rates.calculate_amount(48.0, 10.5) == 504.0
    assert rates.calculate_amount(45.0, 0.001) == 0.05


def test_nearest_rate_returns_none_for_empty_table():
    assert rates.nearest_rate([], fat=4.0, snf=8.5) is None


def test_nearest_rate_picks_minimum_distance():
    table = [_rate(3.5, 8.5, 45.0), _rate(4.0, 8.5, 48.0), _rate(5.0, 9.0, 55.0)]

    resolution = rates.nearest_rate(table, fat=3.8, snf=8.5)

    assert resolution is not None
    assert resolution.rate_per_liter == 48.0
    assert resolution.is_exact is False
    assert resolution.distance == pytest.approx(0.2)
    for rate in table:
        assert rates.rate_distance(rate, fat=3.8, snf=8.5) >= rates.rate_distance(
            table[1], fat=3.8, snf=8.5
        )


def test_nearest_rate_tie_goes_to_lowest_pair():
    """3.75 is equally far from 3.5 and 4.0; the lower FAT wins regardless of input order."""
    table = [_rate(4.0, 8.5, 48.0), _rate(3.5, 8.5, 45.0)]

    resolution = rates.nearest_rate(table, fat=3.75, snf=8.5)

    assert resolution is not None
    assert (resolution.fat, resolution.snf) == (3.5, 8.5)
    assert resolution.rate_per_liter == 45.0


def test_nearest_rate_uses_decimal_distances():
    """Binary float noise must not break ties (0.1 + 0.2 style drift)."""
    table = [_rate(4.1, 8.5, 40.0), _rate(4.3, 8.5, 60.0)]

    resolution = rates.nearest_rate(table, fat=4.2, snf=8.5)

    assert resolution is not None
    assert resolution.rate_per_liter == 40.0


def test_resolve_rate_prefers_exact_match(fake_rates):
    repo = fake_rates((4.0, 8.5, 48.0), (4.1, 8.5, 49.0))

    resolution = rates.resolve_rate(repository=repo, dairy_id=1, fat=4.0, snf=8.5)

    assert resolution is not None
    assert resolution.is_exact is True
    assert resolution.rate_per_liter == 48.0
    assert resolution.distance == 0.0


def test_resolve_rate_falls_back_to_nearest(fake_rates):
    repo = fake_rates((3.5, 8.5, 45.0), (4.0, 8.5, 48.0))

    resolution = rates.resolve_rate(repository=repo, dairy_id=1, fat=3.8, snf=8.5)

    assert resolution is not None
    assert resolution.is_exact is False
    assert resolution.rate_per_liter == 48.0
    assert rates.calculate_amount(resolution.rate_per_liter, 10.0) == 480.0


def test_resolve_rate_empty_table_returns_none(fake_rates):
    assert rates.resolve_rate(repository=fake_rates(), dairy_id=1, fat=4.0, snf=8.5) is None


def test_resolve_rate_is_tenant_scoped(rate_factory, rate_repo, dairy, other_dairy):
    rate_factory(4.0, 8.5, 48.0, owner=other_dairy)

    assert rates.resolve_rate(repository=rate_repo, dairy_id=dairy.id, fat=4.0, snf=8.5) is None


def test_set_rate_upserts_pair(rate_repo, dairy):
    first = rates.set_rate(repository=rate_repo, dairy_id=dairy.id, fat=4.0, snf=8.5, rate_per_liter=48)
    second = rates.set_rate(repository=rate_repo, dairy_id=dairy.id, fat="4.0", snf="8.5", rate_per_liter="50")

    assert first.id == second.id
    table = rates.list_rates(repository=rate_repo, dairy_id=dairy.id)
    assert len(table) == 1
    assert table[0].rate_per_liter == 50.0


def test_set_rate_validates_every_field(rate_repo, dairy):
    with pytest.raises(ValidationError) as excinfo:
        rates.set_rate(repository=rate_repo, dairy_id=dairy.id, fat=16, snf=-1, rate_per_liter=0)

    codes = {error.field: error.code for error in excinfo.value.errors}
    assert codes == {
        "fat": errors.INVALID_FAT,
        "snf": errors.INVALID_SNF,
        "rate_per_liter": errors.INVALID_RATE,
    }


def test_list_rates_ordered_by_fat_then_snf(rate_factory, rate_repo, dairy):
    rate_factory(5.0, 9.0, 55.0)
    rate_factory(3.5, 8.5, 45.0)
    rate_factory(3.5, 8.0, 44.0)

    table = rates.list_rates(repository=rate_repo, dairy_id=dairy.id)

    assert [(r.fat, r.snf) for r in table] == [(3.5, 8.0), (3.5, 8.5), (5.0, 9.0)]


def test_delete_rate(rate_factory, rate_repo, dairy):
    rate = rate_factory(4.0, 8.5, 48.0)

    rates.delete_rate(repository=rate_repo, dairy_id=dairy.id, rate_id=rate.id)

    assert rates.list_rates(repository=rate_repo, dairy_id=dairy.id) == []
    with pytest.raises(NotFoundError) as excinfo:
        rates.delete_rate(repository=rate_repo, dairy_id=dairy.id, rate_id=rate.id)
    assert excinfo.value.code == errors.RATE_NOT_FOUND
