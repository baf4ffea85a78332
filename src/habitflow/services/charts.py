"""PNG renderers for the analytics page."""

from __future__ import annotations

from io import BytesIO

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as mticker
from matplotlib.figure import Figure

from .analytics import AnalyticsSummary

ACCENT = "#8b5cf6"
COMPLETED_COLOR = "#10b981"
MISSED_COLOR = "#1e293b"
MUTED = "#64748b"


def _placeholder(message: str, *, figsize: tuple[float, float]) -> Figure:
    fig, ax = plt.subplots(figsize=figsize)
    ax.text(0.5, 0.5, message, ha="center", va="center", fontsize=12, color="#999")
    ax.axis("off")
    return fig


def _to_png(fig: Figure) -> bytes:
    buffer = BytesIO()
    fig.savefig(buffer, format="png", bbox_inches="tight", dpi=100)
    plt.close(fig)
    return buffer.getvalue()


def build_trend_chart(summary: AnalyticsSummary) -> Figure:
    """Seven-day completion line with a soft fill under the curve."""

    if not summary.trend:
        return _placeholder("No activity yet", figsize=(8, 4))

    labels = [point.label for point in summary.trend]
    counts = [point.count for point in summary.trend]
    positions = list(range(len(labels)))

    fig, ax = plt.subplots(figsize=(8, 4))
    ax.plot(
        positions,
        counts,
        color=ACCENT,
        linewidth=3,
        marker="o",
        markersize=8,
        markerfacecolor="#0f1115",
        markeredgecolor=ACCENT,
        markeredgewidth=3,
    )
    ax.fill_between(positions, counts, color=ACCENT, alpha=0.15)

    ax.set_xticks(positions)
    ax.set_xticklabels(labels, color=MUTED)
    ax.set_ylim(bottom=0)
    ax.yaxis.set_major_locator(mticker.MaxNLocator(integer=True))
    ax.tick_params(axis="y", colors=MUTED)
    ax.grid(True, axis="y", linestyle="--", alpha=0.2)
    ax.set_axisbelow(True)
    for side in ("top", "right", "left"):
        ax.spines[side].set_visible(False)
    ax.set_title("Habits completed, last 7 days", fontsize=12, pad=12)
    fig.tight_layout()
    return fig


def build_distribution_chart(summary: AnalyticsSummary) -> Figure:
    """Completed vs missed donut with the completion total in the centre."""

    sizes = [summary.completed, summary.missed]
    if sum(sizes) <= 0:
        return _placeholder("No habits tracked yet", figsize=(5, 5))

    fig, ax = plt.subplots(figsize=(5, 5))
    ax.pie(
        sizes,
        labels=None,
        colors=[COMPLETED_COLOR, MISSED_COLOR],
        startangle=90,
        counterclock=False,
        wedgeprops=dict(width=0.15, edgecolor="white", linewidth=0),
    )
    ax.text(0, 0, f"{summary.completed}", ha="center", va="center", fontsize=20, fontweight="bold")
    ax.legend(
        [f"Completed ({summary.completed})", f"Missed ({summary.missed})"],
        loc="lower center",
        bbox_to_anchor=(0.5, -0.12),
        ncol=2,
        frameon=False,
    )
    ax.set_aspect("equal")
    return fig


def trend_chart_png(summary: AnalyticsSummary) -> bytes:
    return _to_png(build_trend_chart(summary))


def distribution_chart_png(summary: AnalyticsSummary) -> bytes:
    return _to_png(build_distribution_chart(summary))


__all__ = [
    "build_distribution_chart",
    "build_trend_chart",
    "distribution_chart_png",
    "trend_chart_png",
]
