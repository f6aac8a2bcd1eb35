"""
Chart rendering for the widget.

Draws the filtered price series as a bar chart PNG:
- Bars are anchored at the summary baseline (0 unless prices go negative)
- Bars inside the cheapest window are filled, the rest are outlined
"""
import io
import logging

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from .config import CHART_WIDTH, CHART_HEIGHT

logger = logging.getLogger(__name__)

DPI = 100
MARGIN = 10  # Pixels around the plot area
BAR_FILL_RATIO = 0.8  # Share of each slot covered by its bar
BAR_COLOR = "#ffffff"
BACKGROUND_COLOR = "#222222"


def _new_figure(width, height):
    fig = plt.figure(figsize=(width / DPI, height / DPI), dpi=DPI)
    fig.patch.set_alpha(0.0)
    ax = fig.add_axes([
        MARGIN / width,
        MARGIN / height,
        1 - 2 * MARGIN / width,
        1 - 2 * MARGIN / height,
    ])
    ax.set_axis_off()
    return fig, ax


def _to_png(fig):
    buffer = io.BytesIO()
    try:
        fig.savefig(buffer, format="png", transparent=True, dpi=DPI)
    finally:
        plt.close(fig)
    return buffer.getvalue()


def render_chart(summary, width=CHART_WIDTH, height=CHART_HEIGHT):
    """Render a Summary as a transparent PNG bar chart.

    Args:
        summary: Summary from build_summary()
        width: Image width in pixels
        height: Image height in pixels

    Returns:
        bytes: PNG image
    """
    prices = summary.prices
    baseline = summary.baseline
    top = summary.max_price
    if top == baseline:
        top = baseline + 1  # Flat series still gets visible bars

    fig, ax = _new_figure(width, height)
    ax.set_xlim(0, len(prices))
    ax.set_ylim(baseline, top)

    slot = 1.0
    bar_width = slot * BAR_FILL_RATIO
    window = summary.cheapest_window
    for i, price in enumerate(prices):
        x = i * slot + (slot - bar_width) / 2
        highlighted = window is not None and window.contains(i)
        ax.add_patch(Rectangle(
            (x, baseline),
            bar_width,
            price - baseline,
            facecolor=BAR_COLOR if highlighted else "none",
            edgecolor=BAR_COLOR,
            linewidth=2,
        ))

    logger.debug(f"Rendered {len(prices)} bars ({width}x{height}px)")
    return _to_png(fig)


def render_message(text, width=CHART_WIDTH, height=CHART_HEIGHT):
    """Render a placeholder image carrying a status message."""
    fig, ax = _new_figure(width, height)
    fig.patch.set_alpha(1.0)
    fig.patch.set_facecolor(BACKGROUND_COLOR)
    ax.text(0.5, 0.5, text, color=BAR_COLOR, fontsize=12, ha="center", va="center", transform=ax.transAxes)
    buffer = io.BytesIO()
    try:
        fig.savefig(buffer, format="png", facecolor=BACKGROUND_COLOR, dpi=DPI)
    finally:
        plt.close(fig)
    return buffer.getvalue()
