"""Collection charts rendered with matplotlib."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402

from .summary import WeeklySummary  # noqa: E402


class ReportRenderer(Protocol):
    """Protocol describing renderer behavior."""

    def render(self, figure: Figure, *, output_path: Path) -> None:  # pragma: no cover - interface
        ...


def build_collection_chart(summary: WeeklySummary) -> Figure:
    """Bar chart of liters collected per day, annotated with the day's amount."""

    labels = [day.date.strftime("%a %d") for day in summary.daily_breakdown]
    liters = [day.total_liters for day in summary.daily_breakdown]
    amounts = [day.total_amount for day in summary.daily_breakdown]

    fig, ax = plt.subplots(figsize=(9, 5))
    if any(liters):
        bars = ax.bar(labels, liters, color="#3B82F6", edgecolor="white")
        for bar, amount in zip(bars, amounts):
            if amount:
                ax.annotate(
                    f"{amount:,.2f}",
                    xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
                    ha="center",
                    va="bottom",
                    fontsize=8,
                    color="#374151",
                )
        ax.set_ylabel("Liters")
        ax.grid(axis="y", alpha=0.3)
    else:
        ax.text(0.5, 0.5, "No collections", ha="center", va="center", fontsize=14, color="#666")
        ax.axis("off")

    ax.set_title(
        f"Collection {summary.start_date:%d %b} - {summary.end_date:%d %b %Y}: "
        f"{summary.total_liters:,.1f} L / {summary.total_amount:,.2f}",
        fontsize=12,
    )
    fig.tight_layout()
    return fig


def export_collection_png(
    *,
    summary: WeeklySummary,
    output_path: Path,
    renderer: ReportRenderer | None = None,
) -> Path:
    """Render the collection chart to PNG and return the path."""

    fig = build_collection_chart(summary)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if renderer is not None:
        renderer.render(fig, output_path=output_path)
    else:
        fig.savefig(output_path, bbox_inches="tight", dpi=120)
    plt.close(fig)
    return output_path
