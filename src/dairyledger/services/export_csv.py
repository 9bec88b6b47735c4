"""CSV export helpers for milk entries."""

from __future__ import annotations

import csv
from datetime import date, datetime
from pathlib import Path
from typing import Iterable

from ..models.milk_entry import MilkEntry

HEADERS = ["id", "date", "shift", "customer_id", "fat", "snf", "liters", "rate_per_liter", "amount"]


def _serialize_value(value):
    if value is None:
        return ""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def export_entries_csv(*, entries: Iterable[MilkEntry], output_path: Path) -> Path:
    """Write entries to CSV at `output_path`.

    Columns are deterministic (see ``HEADERS``). Returns the path written.
    """

    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Use newline='' for csv on Windows
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=HEADERS, quoting=csv.QUOTE_MINIMAL)
        writer.writeheader()
        for entry in entries:
            writer.writerow(
                {
                    "id": _serialize_value(entry.id),
                    "date": _serialize_value(entry.collected_on),
                    "shift": _serialize_value(entry.shift),
                    "customer_id": _serialize_value(entry.customer_id),
                    "fat": _serialize_value(entry.fat),
                    "snf": _serialize_value(entry.snf),
                    "liters": _serialize_value(entry.liters),
                    "rate_per_liter": _serialize_value(entry.rate_per_liter),
                    "amount": _serialize_value(entry.amount),
                }
            )

    return output_path
