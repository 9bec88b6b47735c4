"""Admin utilities (demo seed, export bundles)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from tempfile import TemporaryDirectory
from typing import Optional
from zipfile import ZipFile

from ..context import AppContext
from ..errors import StoreError
from ..logging_config import get_logger
from ..models.milk_entry import SHIFT_EVENING, SHIFT_MORNING
from . import auth, customers, milk_entries, rates, summary
from .export_csv import export_entries_csv
from .reports import export_collection_png

logger = get_logger("services.admin_tasks")

DEMO_EMAIL = "owner@demo.dairy"
DEMO_PASSWORD = "demo-password"
DEMO_DAIRY = "Demo Dairy"

DEMO_RATES = [
    (3.5, 8.5, 45.0),
    (4.0, 8.5, 48.0),
    (4.5, 9.0, 52.0),
    (5.0, 9.0, 55.0),
]

DEMO_CUSTOMERS = [
    ("Ramesh Patel", "9800000001"),
    ("Sita Devi", "9800000002"),
    ("Mohan Singh", "9800000003"),
]

# (customer index, shift, fat, snf, liters)
_DEMO_DAY = [
    (0, SHIFT_MORNING, 4.0, 8.5, 10.5),
    (1, SHIFT_MORNING, 3.8, 8.4, 8.0),
    (2, SHIFT_MORNING, 4.6, 9.1, 12.0),
    (0, SHIFT_EVENING, 4.1, 8.6, 6.0),
    (2, SHIFT_EVENING, 5.0, 9.0, 7.5),
]


@dataclass(frozen=True)
class SeedSummary:
    """Counts returned after demo seeding."""

    dairy_id: int
    customers: int
    rates: int
    entries: int
    created: bool


def run_demo_seed(ctx: AppContext, *, days: int = 7, today: Optional[date] = None) -> SeedSummary:
    """Create a demo dairy with customers, a rate chart and a week of entries.

    Re-running is a no-op once the demo owner exists.
    """

    existing = ctx.user_repo.get_by_email(DEMO_EMAIL)
    if existing is not None and existing.dairy_id is not None:
        dairy_id = existing.dairy_id
        logger.info("Demo data already present", extra={"dairy_id": dairy_id})
        return SeedSummary(
            dairy_id=dairy_id,
            customers=len(customers.list_customers(repository=ctx.customer_repo, dairy_id=dairy_id)),
            rates=len(rates.list_rates(repository=ctx.rate_repo, dairy_id=dairy_id)),
            entries=0,
            created=False,
        )

    owner = auth.sign_up_owner(
        users=ctx.user_repo,
        dairies=ctx.dairy_repo,
        email=DEMO_EMAIL,
        password=DEMO_PASSWORD,
        dairy_name=DEMO_DAIRY,
    )
    dairy_id = owner.dairy_id
    if dairy_id is None:
        raise StoreError("Demo owner was created without a dairy")

    for fat, snf, price in DEMO_RATES:
        rates.set_rate(repository=ctx.rate_repo, dairy_id=dairy_id, fat=fat, snf=snf, rate_per_liter=price)

    created = [
        customers.create_customer(repository=ctx.customer_repo, dairy_id=dairy_id, name=name, phone=phone)
        for name, phone in DEMO_CUSTOMERS
    ]

    today = today or date.today()
    entry_count = 0
    for offset in range(days):
        day = today - timedelta(days=offset)
        for index, shift, fat, snf, liters in _DEMO_DAY:
            milk_entries.record_entry(
                entries=ctx.entry_repo,
                rates=ctx.rate_repo,
                customers=ctx.customer_repo,
                dairy_id=dairy_id,
                customer_id=created[index].id,
                entry_date=day,
                fat=fat,
                snf=snf,
                liters=liters,
                shift=shift,
            )
            entry_count += 1

    logger.info("Demo data seeded", extra={"dairy_id": dairy_id, "entries": entry_count})
    return SeedSummary(
        dairy_id=dairy_id,
        customers=len(created),
        rates=len(DEMO_RATES),
        entries=entry_count,
        created=True,
    )


def run_export(
    ctx: AppContext,
    *,
    dairy_id: int,
    start_date: date,
    end_date: date,
    output_dir: Path,
    include_chart: bool = True,
) -> Path:
    """Bundle a CSV of entries in the range and a per-day chart of the same range into a zip."""

    output_dir.mkdir(parents=True, exist_ok=True)
    rows = ctx.entry_repo.filter_by_date_range(start_date, end_date, dairy_id=dairy_id)
    stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")

    with TemporaryDirectory() as tmpdir:
        tmp = Path(tmpdir)
        csv_path = export_entries_csv(entries=rows, output_path=tmp / f"entries-{stamp}.csv")
        artifacts = [csv_path]
        if include_chart:
            daily = summary.range_breakdown(
                repository=ctx.entry_repo, dairy_id=dairy_id, start_date=start_date, end_date=end_date
            )
            artifacts.append(export_collection_png(summary=daily, output_path=tmp / f"collection-{stamp}.png"))

        zip_path = output_dir / f"dairyledger_export_{stamp}.zip"
        with ZipFile(zip_path, "w") as archive:
            for artifact in artifacts:
                archive.write(artifact, arcname=artifact.name)

    logger.info(
        "Export written",
        extra={"dairy_id": dairy_id, "entries": len(rows), "path": str(zip_path)},
    )
    return zip_path
