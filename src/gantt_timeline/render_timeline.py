from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")  # ensure headless, deterministic output
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from .bars import format_month
from .task_models import TimelineLayout

# Sizing knobs (inches unless noted).
ROW_HEIGHT = 0.6
HEADER_HEIGHT = 0.45
BAR_HEIGHT_FRAC = 0.45  # fraction of a row occupied by the bar
FONT_SCALE = 1.0
TITLE_FONT = 14 * FONT_SCALE
LABEL_FONT = 10 * FONT_SCALE
DETAIL_FONT = 7.5 * FONT_SCALE
HEADER_FONT = 9 * FONT_SCALE

BAR_COLOR = "#4b5563"
BAR_EDGE = "#374151"
HEADER_BG = "#f9fafb"
WEEKEND_BG = "#f3f4f6"
DAY_LINE = "#e5e7eb"
MONTH_LINE = "#9ca3af"
MUTED_TEXT = "#6b7280"

EMPTY_MESSAGE = "No tasks to display."


def render_timeline(
    layout: TimelineLayout,
    out_path: str,
    title: str = "",
    row_height: float = ROW_HEIGHT,
) -> None:
    """
    Render a static SVG timeline to `out_path`.

    - Month header cells come from layout.month_spans.
    - Day columns are drawn behind the bars; month starts get a heavier line.
    - Bars are placed on a 0-100 axis straight from their percentage offsets.
    - An empty layout still draws the calendar plus a placeholder message.
    """

    if row_height <= 0:
        raise ValueError("row_height must be positive")
    if not layout.flat_days:
        raise ValueError("layout must contain at least one day")

    rows = max(1, len(layout.bars))
    total = layout.total_days
    col_width = 100.0 / total

    body_height = row_height * rows
    fig_height = max(2.5, body_height + HEADER_HEIGHT + 1.0)
    fig_width = max(12.0, min(24.0, total / 7.0 + 6.0))
    fig = plt.figure(figsize=(fig_width, fig_height))
    # Left column for labels, right column for the timeline; header row on top.
    gs = fig.add_gridspec(
        2,
        2,
        width_ratios=[1.2, 4.0],
        height_ratios=[HEADER_HEIGHT, body_height],
        wspace=0.0,
        hspace=0.0,
        left=0.04,
        right=0.98,
        top=0.88 if title else 0.96,
        bottom=0.04,
    )
    corner_ax = fig.add_subplot(gs[0, 0])
    header_ax = fig.add_subplot(gs[0, 1])
    label_ax = fig.add_subplot(gs[1, 0])
    ax = fig.add_subplot(gs[1, 1], sharex=header_ax)

    corner_ax.set_xlim(0, 1)
    corner_ax.set_ylim(0, 1)
    corner_ax.axis("off")
    corner_ax.add_patch(Rectangle((0, 0), 1, 1, facecolor=HEADER_BG, edgecolor=DAY_LINE))
    corner_ax.text(0.04, 0.5, "Task Name", ha="left", va="center", fontsize=HEADER_FONT, fontweight="bold")

    header_ax.set_xlim(0, 100)
    header_ax.set_ylim(0, 1)
    header_ax.axis("off")
    for span in layout.month_spans:
        x0 = span.start_index * col_width
        width = span.days * col_width
        header_ax.add_patch(Rectangle((x0, 0), width, 1, facecolor=HEADER_BG, edgecolor=MONTH_LINE, linewidth=0.8))
        header_ax.text(
            x0 + width / 2,
            0.5,
            format_month(span.month),
            ha="center",
            va="center",
            fontsize=HEADER_FONT,
            fontweight="bold",
        )

    ax.set_ylim(rows, 0)
    ax.set_xticks([])
    ax.set_yticks([])
    for spine in ax.spines.values():
        spine.set_color(DAY_LINE)

    for day in layout.flat_days:
        x = day.index * col_width
        if day.is_weekend:
            ax.axvspan(x, x + col_width, facecolor=WEEKEND_BG, edgecolor="none", zorder=0)
        if day.month_start:
            ax.axvline(x, color=MONTH_LINE, linewidth=1.2, zorder=1)
        else:
            ax.axvline(x, color=DAY_LINE, linewidth=0.4, zorder=1)
    for row in range(1, rows):
        ax.axhline(row, color=DAY_LINE, linewidth=0.6, zorder=1)

    label_ax.set_xlim(0, 1)
    label_ax.set_ylim(rows, 0)
    label_ax.axis("off")

    if layout.is_empty:
        ax.text(
            50,
            rows / 2,
            EMPTY_MESSAGE,
            ha="center",
            va="center",
            fontsize=LABEL_FONT,
            color=MUTED_TEXT,
            gid="empty-message",
        )

    for row, bar in enumerate(layout.bars):
        y = row + 0.5
        label_ax.text(0.04, y - 0.1, bar.name, ha="left", va="center", fontsize=LABEL_FONT)
        plural = "" if bar.day_span == 1 else "s"
        label_ax.text(
            0.04,
            y + 0.22,
            f"{bar.start_label} - {bar.end_label} ({bar.day_span} day{plural})",
            ha="left",
            va="center",
            fontsize=DETAIL_FONT,
            color=MUTED_TEXT,
        )
        container = ax.barh(
            y,
            width=bar.width_percent,
            left=bar.left_percent,
            height=BAR_HEIGHT_FRAC,
            color=BAR_COLOR,
            edgecolor=BAR_EDGE,
            linewidth=0.5,
            zorder=3,
        )
        for patch in container.patches:
            patch.set_gid(f"bar-{bar.task_id}")

    ax.set_xlim(0, 100)

    if title:
        fig.suptitle(title, x=0.5, fontsize=TITLE_FONT)

    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, format="svg", bbox_inches="tight")
    plt.close(fig)
