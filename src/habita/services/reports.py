"""Chart rendering for the week and month statistics series."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Optional, Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402

from ..models.habit import Habit  # noqa: E402
from .dates import week_range_label  # noqa: E402
from .stats import month_labels, monthly_series, week_labels, weekly_series  # noqa: E402

BAR_COLOR = "#FACC15"
EMPTY_MESSAGE = "No data available for selected habit and time range."


def build_series_chart(
    values: Sequence[float], labels: Sequence[str], *, title: str, caption: str = ""
) -> Figure:
    """Bar chart of one value per label; an all-zero series shows a placeholder."""

    if len(values) != len(labels):
        raise ValueError("values and labels must have the same length")

    fig, ax = plt.subplots(figsize=(8, 4))
    if not any(values):
        ax.text(0.5, 0.5, EMPTY_MESSAGE, ha="center", va="center", fontsize=12, color="#999")
        ax.axis("off")
        ax.set_title(title, fontsize=14, fontweight="bold")
        return fig

    positions = list(range(len(values)))
    bars = ax.bar(positions, values, color=BAR_COLOR, edgecolor="#CA8A04", linewidth=1)
    for bar, value in zip(bars, values):
        if value > 0:
            ax.annotate(
                f"{value:g}",
                (bar.get_x() + bar.get_width() / 2, value),
                textcoords="offset points",
                xytext=(0, 4),
                ha="center",
                fontsize=8,
            )

    ax.set_xticks(positions)
    ax.set_xticklabels(labels)
    ax.grid(True, axis="y", linestyle="--", alpha=0.3)
    ax.set_axisbelow(True)
    ax.set_title(title, fontsize=14, fontweight="bold", pad=12)
    if caption:
        ax.set_xlabel(caption, fontsize=9, color="#666")
    fig.tight_layout()
    return fig


def weekly_chart(habit: Habit, week_offset: int = 0, *, today: Optional[date] = None) -> Figure:
    return build_series_chart(
        weekly_series(habit, week_offset, today=today),
        week_labels(week_offset, today=today),
        title=f"{habit.emoji} {habit.name}: {week_range_label(week_offset, today=today)}",
        caption="Shows daily value for the selected week.",
    )


def monthly_chart(habit: Habit, *, today: Optional[date] = None) -> Figure:
    return build_series_chart(
        monthly_series(habit, today=today),
        month_labels(),
        title=f"{habit.emoji} {habit.name}: last 4 weeks",
        caption="Shows average weekly value over the past month.",
    )


def render_chart_png(figure: Figure, output_path: Path) -> Path:
    """Write ``figure`` to ``output_path`` as PNG and release it."""

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        figure.savefig(output_path, bbox_inches="tight", dpi=100)
    finally:
        plt.close(figure)
    return output_path


__all__ = ["build_series_chart", "monthly_chart", "render_chart_png", "weekly_chart"]
