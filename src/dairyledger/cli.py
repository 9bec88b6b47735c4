"""Flask CLI commands for DairyLedger."""

from __future__ import annotations

import json
from datetime import date, timedelta
from pathlib import Path

import click
from flask import Flask

from .errors import DairyLedgerError
from .extensions import get_context


def _date_option(*decls: str, help_text: str):
    return click.option(*decls, type=click.DateTime(formats=["%Y-%m-%d"]), default=None, help=help_text)


def init_app(app: Flask) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("dairyledger-init-db")
    def dairyledger_init_db() -> None:
        """Create the database schema."""

        from .infra.database import init_database

        init_database(get_context().engine)
        click.echo(f"Database ready: {get_context().config.DATABASE_URL}")

    @app.cli.command("dairyledger-seed")
    @click.option("--days", default=7, show_default=True, help="Days of demo entries to create")
    def dairyledger_seed(days: int) -> None:
        """Seed a demo dairy with customers, rates and entries."""

        from .services.admin_tasks import DEMO_EMAIL, run_demo_seed

        result = run_demo_seed(get_context(), days=days)
        if result.created:
            click.echo(
                f"Seeded dairy {result.dairy_id}: {result.customers} customers, "
                f"{result.rates} rates, {result.entries} entries (login {DEMO_EMAIL})."
            )
        else:
            click.echo(f"Demo dairy {result.dairy_id} already exists; nothing to do.")

    @app.cli.command("dairyledger-export")
    @click.argument("dairy_id", type=int)
    @_date_option("--start", help_text="First day to export (default: 30 days back)")
    @_date_option("--end", help_text="Last day to export (default: today)")
    @click.option("--output-dir", type=click.Path(file_okay=False, path_type=Path), default=None)
    @click.option(
        "--no-chart",
        is_flag=True,
        default=False,
        help="Skip the PNG chart of daily totals over the exported range",
    )
    def dairyledger_export(dairy_id: int, start, end, output_dir: Path | None, no_chart: bool) -> None:
        """Export entries as CSV (plus a PNG chart) into a zip file."""

        from .services.admin_tasks import run_export

        ctx = get_context()
        end_day = end.date() if end else date.today()
        start_day = start.date() if start else end_day - timedelta(days=30)
        if start_day > end_day:
            raise click.BadParameter("--start must not be after --end")
        path = run_export(
            ctx,
            dairy_id=dairy_id,
            start_date=start_day,
            end_date=end_day,
            output_dir=output_dir or ctx.config.DATA_DIR / "exports",
            include_chart=not no_chart,
        )
        click.echo(f"Export written: {path}")

    @app.cli.command("dairyledger-summary")
    @click.argument("dairy_id", type=int)
    @click.option(
        "--period",
        type=click.Choice(["daily", "weekly", "monthly"]),
        default="daily",
        show_default=True,
    )
    @_date_option("--date", "on_date", help_text="Day (daily), first day (weekly) or any day of the month (monthly)")
    @click.option("--customer-id", type=int, default=None)
    def dairyledger_summary(dairy_id: int, period: str, on_date, customer_id: int | None) -> None:
        """Print a collection summary as JSON."""

        from .services import summary

        repo = get_context().entry_repo
        day = on_date.date() if on_date else date.today()
        try:
            if period == "daily":
                result = summary.daily_summary(repository=repo, dairy_id=dairy_id, day=day, customer_id=customer_id)
            elif period == "weekly":
                result = summary.weekly_summary(
                    repository=repo, dairy_id=dairy_id, start_date=day, customer_id=customer_id
                )
            else:
                result = summary.monthly_summary(
                    repository=repo, dairy_id=dairy_id, year=day.year, month=day.month, customer_id=customer_id
                )
        except DairyLedgerError as exc:
            raise click.ClickException(exc.message) from exc
        click.echo(json.dumps(result.to_dict(), indent=2))
