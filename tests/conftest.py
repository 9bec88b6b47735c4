"""Pytest configuration and shared fixtures for DairyLedger tests.

This module provides database fixtures, test data factories, and an in-memory
rate repository for exercising domain logic, repositories, and services
without touching a real application database.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

import pytest

from dairyledger import create_app
from dairyledger.config import TestingConfig
from dairyledger.context import AppContext, create_app_context
from dairyledger.models import Customer, Dairy, MilkEntry, Rate
from dairyledger.models.milk_entry import SHIFT_MORNING
from dairyledger.services.rates import calculate_amount

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def config(tmp_path) -> TestingConfig:
    """Configuration pointing at a throwaway SQLite file under ``tmp_path``."""

    return TestingConfig(tmp_path, database_url=f"sqlite:///{tmp_path / 'test.db'}")


@pytest.fixture(scope="function")
def app_context(config):
    """Application context with a fresh schema for each test.

    Yields:
        AppContext: engine, session factory and SQLModel repositories
    """

    ctx = create_app_context(config)
    yield ctx
    ctx.engine.dispose()


@pytest.fixture
def session_factory(app_context: AppContext):
    return app_context.session_factory


@pytest.fixture
def rate_repo(app_context: AppContext):
    return app_context.rate_repo


@pytest.fixture
def customer_repo(app_context: AppContext):
    return app_context.customer_repo


@pytest.fixture
def entry_repo(app_context: AppContext):
    return app_context.entry_repo


@pytest.fixture
def user_repo(app_context: AppContext):
    return app_context.user_repo


@pytest.fixture
def dairy_repo(app_context: AppContext):
    return app_context.dairy_repo


@pytest.fixture
def app(app_context: AppContext):
    app = create_app(ctx=app_context)
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def dairy(dairy_repo) -> Dairy:
    """Create the default tenant used for scoping data."""

    return dairy_repo.create(Dairy(name="Test Dairy"))


@pytest.fixture
def other_dairy(dairy_repo) -> Dairy:
    """A second tenant for isolation checks."""

    return dairy_repo.create(Dairy(name="Other Dairy"))


@pytest.fixture
def customer_factory(customer_repo, dairy):
    """Factory for creating test customers.

    Returns:
        Callable: Function that creates and persists Customer instances
    """

    def _create_customer(
        name: str = "Test Customer",
        phone: Optional[str] = None,
        owner: Optional[Dairy] = None,
    ) -> Customer:
        tenant = owner or dairy
        return customer_repo.create(
            Customer(dairy_id=tenant.id, name=name, phone=phone), dairy_id=tenant.id
        )

    return _create_customer


@pytest.fixture
def rate_factory(rate_repo, dairy):
    """Factory for rate table rows.

    Returns:
        Callable: Function that upserts Rate instances
    """

    def _create_rate(
        fat: float,
        snf: float,
        rate_per_liter: float,
        owner: Optional[Dairy] = None,
    ) -> Rate:
        tenant = owner or dairy
        return rate_repo.upsert(
            Rate(dairy_id=tenant.id, fat=fat, snf=snf, rate_per_liter=rate_per_liter),
            dairy_id=tenant.id,
        )

    return _create_rate


@pytest.fixture
def entry_factory(entry_repo, dairy):
    """Factory for milk entries written straight to the repository.

    The amount is priced from ``rate_per_liter`` unless given explicitly, so
    summaries can be tested without a rate table.
    """

    def _create_entry(
        customer: Customer,
        collected_on: date,
        liters: float = 10.0,
        rate_per_liter: float = 48.0,
        fat: float = 4.0,
        snf: float = 8.5,
        shift: str = SHIFT_MORNING,
        amount: Optional[float] = None,
        owner: Optional[Dairy] = None,
    ) -> MilkEntry:
        tenant = owner or dairy
        return entry_repo.create(
            MilkEntry(
                dairy_id=tenant.id,
                customer_id=customer.id,
                collected_on=collected_on,
                shift=shift,
                fat=fat,
                snf=snf,
                liters=liters,
                rate_per_liter=rate_per_liter,
                amount=calculate_amount(rate_per_liter, liters) if amount is None else amount,
            ),
            dairy_id=tenant.id,
        )

    return _create_entry


# =============================================================================
# In-memory doubles
# =============================================================================


class FakeRateRepository:
    """Dict-backed rate repository for pure service tests."""

    def __init__(self, rates: Optional[list[Rate]] = None):
        self.rates: list[Rate] = []
        self.pair_lookups = 0
        for rate in rates or []:
            self.upsert(rate, dairy_id=rate.dairy_id)

    def get_by_id(self, rate_id: int, *, dairy_id: int) -> Optional[Rate]:
        return next((r for r in self.rates if r.id == rate_id and r.dairy_id == dairy_id), None)

    def get_by_pair(self, fat: float, snf: float, *, dairy_id: int) -> Optional[Rate]:
        self.pair_lookups += 1
        return next(
            (r for r in self.rates if r.dairy_id == dairy_id and r.fat == fat and r.snf == snf),
            None,
        )

    def list_all(self, *, dairy_id: int) -> list[Rate]:
        return sorted((r for r in self.rates if r.dairy_id == dairy_id), key=lambda r: (r.fat, r.snf))

    def upsert(self, rate: Rate, *, dairy_id: int) -> Rate:
        rate.dairy_id = dairy_id
        existing = self.get_by_pair(rate.fat, rate.snf, dairy_id=dairy_id)
        if existing is not None:
            existing.rate_per_liter = rate.rate_per_liter
            return existing
        rate.id = len(self.rates) + 1
        self.rates.append(rate)
        return rate

    def delete(self, rate_id: int, *, dairy_id: int) -> bool:
        rate = self.get_by_id(rate_id, dairy_id=dairy_id)
        if rate is None:
            return False
        self.rates.remove(rate)
        return True


@pytest.fixture
def fake_rates():
    """Factory building a ``FakeRateRepository`` for dairy 1 from (fat, snf, price) rows."""

    def _build(*rows: tuple[float, float, float]) -> FakeRateRepository:
        return FakeRateRepository(
            [Rate(dairy_id=1, fat=fat, snf=snf, rate_per_liter=price) for fat, snf, price in rows]
        )

    return _build
