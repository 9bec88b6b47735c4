"""Tests for CSV export and chart helpers."""

from __future__ import annotations

import csv
from datetime import date
from pathlib import Path

from matplotlib.figure import Figure

from dairyledger.models import MilkEntry
from dairyledger.services import export_csv, reports, summary


def test_export_entries_csv_creates_file(tmp_path):
    """Exporting entries writes a CSV with the fixed header and one row per entry."""

    rows = [
        MilkEntry(
            id=1, dairy_id=1, customer_id=7, collected_on=date(2024, 1, 15), shift="morning",
            fat=4.0, snf=8.5, liters=10.5, rate_per_liter=48.0, amount=504.0,
        ),
        MilkEntry(
            id=2, dairy_id=1, customer_id=8, collected_on=date(2024, 1, 15), shift="evening",
            fat=3.8, snf=8.5, liters=9.5, rate_per_liter=48.0, amount=456.0,
        ),
    ]

    output_path = Path(tmp_path) / "nested" / "entries.csv"
    result = export_csv.export_entries_csv(entries=rows, output_path=output_path)

    assert result == output_path
    with output_path.open(newline="", encoding="utf-8") as fh:
        reader = csv.DictReader(fh)
        assert reader.fieldnames == export_csv.HEADERS
        data = list(reader)
    assert [row["date"] for row in data] == ["2024-01-15", "2024-01-15"]
    assert data[0]["amount"] == "504.0"
    assert data[1]["shift"] == "evening"


def test_collection_chart_for_empty_week():
    week = summary.WeeklySummary(
        start_date=date(2024, 1, 1),
        end_date=date(2024, 1, 7),
        total_liters=0.0,
        total_amount=0.0,
        entry_count=0,
        daily_breakdown=[summary.DailySummary(date=date(2024, 1, day)) for day in range(1, 8)],
    )

    fig = reports.build_collection_chart(week)

    assert isinstance(fig, Figure)


class _RecordingRenderer:
    def __init__(self):
        self.calls = []

    def render(self, figure, *, output_path):
        self.calls.append(output_path)
        output_path.write_bytes(b"png")


def test_export_collection_png(tmp_path, entry_repo, dairy, entry_factory, customer_factory):
    entry_factory(customer_factory(), date(2024, 1, 2), liters=12.0)
    week = summary.weekly_summary(repository=entry_repo, dairy_id=dairy.id, start_date=date(2024, 1, 1))

    written = reports.export_collection_png(summary=week, output_path=tmp_path / "week.png")
    assert written.exists() and written.stat().st_size > 0

    renderer = _RecordingRenderer()
    reports.export_collection_png(summary=week, output_path=tmp_path / "custom.png", renderer=renderer)
    assert renderer.calls == [tmp_path / "custom.png"]
