"""Render balance series to PNG line charts."""

import logging
import os

import matplotlib

# Use a non-interactive backend for headless environments
matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from .series import BalanceSeries  # noqa: E402

log = logging.getLogger(__name__)

Y_MARGIN = 10


def y_limits(series: BalanceSeries) -> tuple[float, float]:
    """Chart bounds, series minimum and maximum widened by a fixed margin."""
    return float(series.min) - Y_MARGIN, float(series.max) + Y_MARGIN


def draw_balance(
    series: BalanceSeries,
    out_path: str,
    width: int = 1920,
    height: int = 1080,
    dpi: int = 100,
) -> str:
    """Draw *series* as a line chart and save to `out_path` (PNG).

    X axis is the ordinal position of each posting. Returns the absolute
    path to the saved file.
    """
    parent = os.path.dirname(out_path)
    if parent:
        os.makedirs(parent, exist_ok=True)

    xs = list(range(len(series.values)))
    ys = [float(v) for v in series.values]

    fig, ax = plt.subplots(figsize=(width / dpi, height / dpi), dpi=dpi)
    ax.set_title(f"Balance for {series.account}")
    ax.plot(xs, ys, marker="o", linewidth=1.5)
    ax.set_ylim(*y_limits(series))
    ax.set_xlabel("Time")
    ax.set_ylabel("Balance")
    ax.grid(True, linestyle=":", alpha=0.5)

    fig.tight_layout()
    fig.savefig(out_path, dpi=dpi)
    plt.close(fig)
    log.info("Chart for %s saved to %s", series.account, out_path)
    return os.path.abspath(out_path)
